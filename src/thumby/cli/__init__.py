"""CLI layer — argument parsing, Rich output, and the error boundary.

The outermost layer: it may import from ``core``, ``infra``, and
``utils``; nothing imports from ``cli``.
"""
