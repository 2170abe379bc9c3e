"""Core package of fieldcipher: errors, digests, path selection and traversal."""
