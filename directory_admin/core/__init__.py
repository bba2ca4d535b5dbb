"""Core logic for the directory admin, independent of Flask.

Module Structure:
    - directory/     : HTTP client and user operations for the directory API
    - models.py      : User read model and UserFormData draft
    - controller.py  : Screen state, reducer and side-effect executor
    - view.py        : Table/form presentation helpers
    - validators.py  : Required-field checks for submitted forms

Usage Pattern:
    from directory_admin.core.directory import DirectoryClient, UserService
    from directory_admin.core.controller import DirectoryController
"""
