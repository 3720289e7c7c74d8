from .xml_writer import WxHexEditorWriter

__all__ = ["WxHexEditorWriter"]
