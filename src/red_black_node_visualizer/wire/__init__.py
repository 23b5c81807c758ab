"""Wire subpackage: the tree string format and its encoder and decoder.

Re-exports the public API for the wire module:
- TreeEncoder: serializes a CanonicalTree into a tree string
- TreeDecoder: parses a tree string into DecodedNode objects
- schema: field names and reserved values of the tree string
"""

from red_black_node_visualizer.wire import schema
from red_black_node_visualizer.wire.decoder import TreeDecoder
from red_black_node_visualizer.wire.encoder import TreeEncoder

__all__ = ["TreeDecoder", "TreeEncoder", "schema"]
