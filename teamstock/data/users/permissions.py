"""
Roles and the permissions they grant

A user's role is stored on the users table; permissions are derived from it
and never stored. Team-scoped permissions (``*_TEAM``) only apply to records
of the user's own team.
"""

SUPER_ADMIN = 'SUPER_ADMIN'
ADMIN = 'ADMIN'
SUPERVISOR = 'SUPERVISOR'
TEAM_LEAD = 'TEAM_LEAD'
PURCHASING_LEAD = 'PURCHASING_LEAD'
INVENTORY_LEAD = 'INVENTORY_LEAD'
MEMBER = 'MEMBER'

ROLES = (SUPER_ADMIN, ADMIN, SUPERVISOR, TEAM_LEAD, PURCHASING_LEAD, INVENTORY_LEAD, MEMBER)
DEFAULT_ROLE = MEMBER

# Roles a team lead may hand out inside their own team
TEAM_ASSIGNABLE_ROLES = (PURCHASING_LEAD, INVENTORY_LEAD, MEMBER)

ADMIN_ALL = 'ADMIN_ALL'
ADMIN_TEAM = 'ADMIN_TEAM'
READ_ALL = 'READ_ALL'
READ_TEAM = 'READ_TEAM'
WRITE_ALL = 'WRITE_ALL'
WRITE_TEAM = 'WRITE_TEAM'
WRITE_OWN = 'WRITE_OWN'
DELETE_ALL = 'DELETE_ALL'
APPROVE_PURCHASES = 'APPROVE_PURCHASES'
APPROVE_TEAM_PURCHASES = 'APPROVE_TEAM_PURCHASES'
WRITE_INVENTORY = 'WRITE_INVENTORY'
MANAGE_TEAM = 'MANAGE_TEAM'
MANAGE_USERS = 'MANAGE_USERS'
ASSIGN_ROLES = 'ASSIGN_ROLES'
VIEW_ANALYTICS = 'VIEW_ANALYTICS'
VIEW_TEAM_ANALYTICS = 'VIEW_TEAM_ANALYTICS'
EDIT_BOM = 'EDIT_BOM'
VIEW_BOM = 'VIEW_BOM'
EXPORT_DATA = 'EXPORT_DATA'
IMPORT_DATA = 'IMPORT_DATA'

ROLE_PERMISSIONS = {
    SUPER_ADMIN: frozenset({
        ADMIN_ALL, READ_ALL, WRITE_ALL, DELETE_ALL, APPROVE_PURCHASES, MANAGE_USERS,
        ASSIGN_ROLES, VIEW_ANALYTICS, EDIT_BOM, EXPORT_DATA, IMPORT_DATA,
    }),
    ADMIN: frozenset({
        ADMIN_TEAM, READ_ALL, WRITE_ALL, APPROVE_TEAM_PURCHASES, MANAGE_TEAM,
        VIEW_ANALYTICS, EDIT_BOM, EXPORT_DATA, IMPORT_DATA,
    }),
    SUPERVISOR: frozenset({READ_ALL, READ_TEAM, VIEW_ANALYTICS, VIEW_BOM, EXPORT_DATA}),
    TEAM_LEAD: frozenset({
        READ_TEAM, WRITE_TEAM, MANAGE_TEAM, APPROVE_TEAM_PURCHASES, ASSIGN_ROLES,
        VIEW_TEAM_ANALYTICS, EDIT_BOM, EXPORT_DATA, IMPORT_DATA,
    }),
    PURCHASING_LEAD: frozenset({
        READ_TEAM, APPROVE_PURCHASES, APPROVE_TEAM_PURCHASES, VIEW_TEAM_ANALYTICS,
        VIEW_BOM, EXPORT_DATA,
    }),
    INVENTORY_LEAD: frozenset({
        READ_TEAM, WRITE_INVENTORY, VIEW_TEAM_ANALYTICS, EDIT_BOM, EXPORT_DATA, IMPORT_DATA,
    }),
    MEMBER: frozenset({READ_TEAM, WRITE_OWN, VIEW_BOM}),
}


def permissions_for(role):
    return ROLE_PERMISSIONS.get(role, frozenset())


def validate_role(value):
    """Canonical role name for ``value`` (case-insensitive); unknown roles are a ValueError"""
    role = str(value or '').strip().upper().replace('-', '_')
    if role not in ROLES:
        raise ValueError(f"Unknown role '{value}'. Expected one of: {', '.join(ROLES)}")
    return role
