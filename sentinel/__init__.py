"""
Job Sentinel Backend.

Core components:
- core: Profile store, watchlist, alert ledger, monitor loop
- agents: Profiler, Scout, Critic (classification pipeline)
- tools: Resume import, search APIs
- db: Snapshot persistence
- api: Dashboard HTTP API
"""
