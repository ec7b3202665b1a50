"""wordlist_forge

Streaming wordlist filtering and splitting.

Public API surface:
- wordlist_forge.cli.main : CLI entrypoint
- wordlist_forge.config.builder.build_filter_spec : validated FilterSpec
- wordlist_forge.stages.registry.evaluate / make_predicates : per-line predicates
- wordlist_forge.pipeline.build.run_wordlist : run pipeline
- wordlist_forge.writers : add/extend output partitioners

Lines are filtered one at a time; only sort, randomize and percentage
splitting hold the surviving lines in memory.
"""
__all__ = ["__version__"]
__version__ = "0.3.0"
