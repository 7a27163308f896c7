# Services package init
"""
UserHub Backend - Services Layer

Service Inventory:
    - UserService: list/get/create/update/delete over User records
"""
