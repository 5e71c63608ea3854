"""Timeline rendering helpers.

This package hands lanes computed by `lanes` to the d3-timeline engine: the
render delegate and chart component, the engine payload adapter, and the
codec for host payloads.
"""
