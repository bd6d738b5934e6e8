"""Shape-selection kernel: parser, schema registry, descriptor generator, model factory."""
