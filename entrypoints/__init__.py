"""Command line and platform bootstrap entrypoints"""
