"""
myktls: symbol resolution and go-to-definition for `.mykt` sources.

The pipeline is parse -> (imports + symbol builder) -> scope tree ->
declaration lookup; `myktls.server` exposes it over LSP.
"""

__version__ = "0.1.0"
