"""
Use Cases

Organized into domain folders:
- organizations/: Onboarding (organizations, workspaces)
- roles/: Role registry
- permissions/: Permission resolution and grant management
- invitations/: Invitation lifecycle

Import from subdirectories for better organization.
"""
