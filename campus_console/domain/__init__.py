"""
Domain layer.

Pure business objects and rules for the admin console: identities and their
role-merge policy, seller applications and their state machine, seller
profiles, activity log entries, dashboard snapshots and presence sets.
Nothing here performs I/O.
"""
