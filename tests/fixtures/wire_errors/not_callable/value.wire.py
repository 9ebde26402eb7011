wire = 42
