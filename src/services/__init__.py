"""Business logic services used by handlers.

Services receive their repositories at construction time; handlers build
them lazily through ``handlers.dependencies`` so importing a handler never
opens a connection.
"""

# Do NOT import services here - use lazy loading in handlers instead
