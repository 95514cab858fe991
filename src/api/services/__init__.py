# This file marks the services package: branch-scoped business rules and parameterized SQL.
# Routers depend on these classes instead of issuing queries themselves.
