"""Export utilities for verification reports."""

from pathlib import Path

from qrsign.models.result import VerificationReport


def to_json(report: VerificationReport, indent: int = 2, include_content: bool = True) -> str:
    """
    Convert VerificationReport to JSON string.

    Args:
        report: VerificationReport to serialize
        indent: JSON indentation level
        include_content: Keep the scraped page content in the output

    Returns:
        JSON string
    """
    exclude = None if include_content else {"scrape": {"page_content"}}
    return report.model_dump_json(indent=indent, exclude=exclude)


def to_dict(report: VerificationReport, include_content: bool = True) -> dict:
    """
    Convert VerificationReport to dictionary.

    Args:
        report: VerificationReport to convert
        include_content: Keep the scraped page content in the output

    Returns:
        Dictionary representation
    """
    exclude = None if include_content else {"scrape": {"page_content"}}
    return report.model_dump(mode="json", exclude=exclude)


def save_json(
    report: VerificationReport,
    filepath: str | Path,
    indent: int = 2,
) -> Path:
    """
    Save VerificationReport to JSON file.

    Args:
        report: VerificationReport to save
        filepath: Output file path
        indent: JSON indentation level

    Returns:
        Path to saved file
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.model_dump_json(indent=indent), encoding="utf-8")
    return path


def load_json(filepath: str | Path) -> VerificationReport:
    """
    Load VerificationReport from JSON file.

    Args:
        filepath: Path to JSON file

    Returns:
        VerificationReport instance
    """
    path = Path(filepath)
    return VerificationReport.model_validate_json(path.read_text(encoding="utf-8"))
