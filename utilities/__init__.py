# Utilities
# External tool wrappers and output naming helpers
