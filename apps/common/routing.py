"""Router helpers shared by the app URLconfs."""

# Canonical 8-4-4-4-12 form; anything else never reaches a view and 404s
UUID_LOOKUP_REGEX = (
    r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'
)
