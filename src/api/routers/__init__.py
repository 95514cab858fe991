# This file marks the routers package: one module per resource, registered by the app factory.
