"""
In-memory usage analytics for the recommendation API.

Nothing here is persisted; counters reset when the process restarts.
"""
