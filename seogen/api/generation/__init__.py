"""Generation pipeline: config resolution, briefings, refinement, orchestration.

Submodules are imported directly (the prompt package depends on
``config_resolver``), e.g.:

    from seogen.api.generation.orchestrator import GenerationOrchestrator
"""
