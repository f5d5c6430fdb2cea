"""
`users` resource: CRUD over the `users` table.
"""
