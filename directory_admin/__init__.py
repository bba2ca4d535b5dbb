"""Directory Admin: operator UI for users held by a Weavy-style directory API.

To use the Flask app:
    from directory_admin.flask_app import create_app

To use the directory client without Flask:
    from directory_admin.core.directory import DirectoryClient, UserService
"""
# flask_app is not imported here so the CLI can use directory_admin.core
# without pulling in Flask
