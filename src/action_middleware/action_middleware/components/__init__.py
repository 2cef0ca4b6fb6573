# ABOUTME: Components package for the action middleware library
# ABOUTME: Holds the building blocks composed by the engine implementations
