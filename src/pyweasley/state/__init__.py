"""State/store layer.

This package is the single source of truth for where each tracked person
is. Inbound presence events are validated into typed events, judged by the
pure policy, and only then written to the store by the processor.
"""
