"""Session domain services: membership, scoring and category progression.

Functions here mutate a Session the caller already holds under the store's
per-session lock. They raise SessionError subclasses and never touch the
transport, keeping socket concerns separated from session mechanics.
"""
