"""RIVL file format: markup document, binary blob and value decoding."""
