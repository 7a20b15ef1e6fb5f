"""Flow package exports kept minimal to avoid heavy imports at package import time.

Import submodules directly where needed, e.g.:
    from clarity.flows.decompile import decompile_malware
    from clarity.flows.perform_analysis import perform_analysis
"""

__all__ = []
