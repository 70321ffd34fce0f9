"""
Asset generation package for Lethal Posters and Lethal Paintings.

Modules:
- core: batch orchestration across all decoded input images
- assets: input decoding, the shared image store and template loading
- generator: atlas, tips and painting generators
- render: resizing, alpha overlay and PNG output
- layout: fixed slot geometry, template names and output folders
- errors: fatal error types raised during a run
"""

__version__ = "0.1.0"
