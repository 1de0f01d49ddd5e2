"""Authors, books and reviews: entities, row mapping, writes and seeding."""
