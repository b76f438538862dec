from typing import List, Optional

from pydantic import BaseModel

from misinfo_lens.core.config import config
from misinfo_lens.core.exceptions import NoRecordAvailable
from misinfo_lens.core.models import AnalysisRecord

NO_SOURCES_MARKER = "No alternative sources found."


class ReportArtifact(BaseModel):
    """A rendered report ready to hand to a download/save mechanism."""
    file_name: str
    content_type: str
    content: str


def render_report(record: Optional[AnalysisRecord]) -> str:
    """
    Render an analysis record as a plain-text report.

    The sources section only appears for misinformation verdicts. Same record
    in, same text out.
    """
    if record is None:
        raise NoRecordAvailable()

    verdict = record.verdict
    lines: List[str] = [
        f"Is Misinformation: {'Yes' if verdict.is_misinformation else 'No'}",
        f"Reason: {verdict.reason}",
    ]

    if verdict.is_misinformation:
        lines.append("")
        lines.append("Alternative Sources:")
        if record.sources:
            lines.extend(f"{i}. {url}" for i, url in enumerate(record.sources, start=1))
        else:
            lines.append(NO_SOURCES_MARKER)

    return "\n".join(lines) + "\n"


def build_report_artifact(record: Optional[AnalysisRecord]) -> ReportArtifact:
    return ReportArtifact(
        file_name=config.REPORT_FILE_NAME,
        content_type=config.REPORT_CONTENT_TYPE,
        content=render_report(record),
    )
