"""Game logic: battle engine, opponents, session orchestration and managers."""
