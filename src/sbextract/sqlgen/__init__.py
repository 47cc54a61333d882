"""SQL text generation: the setup script and the export script."""

from sbextract.sqlgen.export import build_export_script, export_filename
from sbextract.sqlgen.setup import build_setup_script

__all__ = ["build_export_script", "build_setup_script", "export_filename"]
