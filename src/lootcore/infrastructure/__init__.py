"""
Infrastructure layer: logging setup and event log sinks.
"""
