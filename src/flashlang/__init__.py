"""
Flash Interpreter Package

A resumable, line-oriented interpreter for the Flash teaching language.

ARCHITECTURAL GUARANTEE:
------------------------
The core (model, line_parser, blocks, engine) contains ZERO knowledge of:
    - Editors or display surfaces
    - How input is collected
    - Scheduling or event loops

Collaborators talk to the engine only through load / run / step /
deliver_input / is_awaiting_input and the output callback.
"""

__version__ = "0.1.0"
