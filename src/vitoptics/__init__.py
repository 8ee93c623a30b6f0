"""
vitoptics - Vision Transformer workload estimation for photonic optical cores.

Subpackages:
    core: Configuration snapshots, results and the editable ConfigModel
    analysis: Access counts, optical metrics, parameter sweeps
    reporting: Text/JSON/CSV/Markdown reports, walkthroughs, run logs
    visualization: matplotlib charts and panel layouts
    adapters: Pydantic output schema
"""

__version__ = "0.1.0"
