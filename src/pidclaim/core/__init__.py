"""Filesystem, process-table and configuration primitives."""
