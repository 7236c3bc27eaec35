"""Video Narrative Genie - turn a piece of text into a narrated video."""

__version__ = "0.1.0"
