"""
RunConfiguration model: the immutable snapshot of command-line choices.
"""

from pathlib import Path

from pydantic import BaseModel


class RunConfiguration(BaseModel):
    """
    Every choice that shapes a run, fixed once at startup.

    Attributes:
        script_path: Transform script (or rule file) to execute
        dialect: Transform dialect selected from the script's extension
        module_paths: Extra module search paths handed to the transform
        input_dir: Directory to read records from (stdin when None)
        success_dir: Directory receiving success-outcome content
        failure_dir: Directory receiving failure-outcome content
        attributes_dir: Directory receiving per-record attribute documents
        attribute_file: Property file merged into every input record
        report_success: Report records routed to success
        report_failure: Report records routed to failure
        include_attributes: Include the attribute block in reports
        include_content: Include record content in reports
    """

    script_path: Path
    dialect: str = "python"
    module_paths: tuple[str, ...] = ()
    input_dir: Path | None = None
    success_dir: Path | None = None
    failure_dir: Path | None = None
    attributes_dir: Path | None = None
    attribute_file: Path | None = None
    report_success: bool = True
    report_failure: bool = False
    include_attributes: bool = False
    include_content: bool = False

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "script_path": "scripts/route_by_size.py",
                "dialect": "python",
                "module_paths": ["lib/"],
                "input_dir": "data/in",
                "success_dir": "data/out",
                "failure_dir": None,
                "attributes_dir": None,
                "attribute_file": "config/attrs.properties",
                "report_success": True,
                "report_failure": False,
                "include_attributes": True,
                "include_content": False
            }
        }

    def output_dirs(self) -> dict[str, Path]:
        """Configured output directories keyed by a human-readable label."""
        labelled = {
            "Success output directory": self.success_dir,
            "Failure output directory": self.failure_dir,
            "Attributes output directory": self.attributes_dir,
        }
        return {label: path for label, path in labelled.items() if path is not None}


def parse_module_paths(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated module path list, dropping blanks."""
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())
