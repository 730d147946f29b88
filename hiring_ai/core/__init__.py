"""
Core business logic module.

Contains the exception hierarchy, job queue, processing pipeline,
vector search engine, and orchestrator. Import submodules directly;
boundary adapters depend on core.exceptions, so nothing is re-exported here.
"""
