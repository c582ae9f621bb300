"""Unit tests for tlafmt components.

These tests exercise single modules without the tree-sitter grammar:
tokens and spacing, indentation, blank lines, the two global buffer
passes, rendering, lowering over fake trees, options and file operations.
"""
