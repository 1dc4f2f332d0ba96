"""Core systems: data definitions, configuration, events, battle state and input."""
