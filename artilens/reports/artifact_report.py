from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from typing import List, Optional

from artilens import __app_name__, __version__
from artilens.core.classifier import HIGH_ENTROPY_THRESHOLD, entropy_level
from artilens.core.models import ArtifactClassification, FileType

LARGE_FILE_BYTES = 100 * 1024 * 1024
NO_INDICATORS_LINE = "No suspicious indicators detected"


def security_score(analysis: ArtifactClassification) -> int:
    score = 10
    score -= len(analysis.suspicious_indicators) * 2
    if analysis.entropy > HIGH_ENTROPY_THRESHOLD:
        score -= 1
    if analysis.file_type is FileType.UNKNOWN:
        score -= 1
    return max(0, min(10, score))


def build_recommendations(analysis: ArtifactClassification) -> List[str]:
    recommendations: List[str] = []
    if analysis.suspicious_indicators:
        recommendations.append("**Conduct deeper analysis** - Suspicious indicators detected")
    if analysis.entropy > HIGH_ENTROPY_THRESHOLD:
        recommendations.append("**Check for encryption** - High entropy suggests encrypted content")
    if analysis.file_type is FileType.UNKNOWN:
        recommendations.append("**Verify file type** - Unknown file type detected")
    if analysis.size > LARGE_FILE_BYTES:
        recommendations.append("**Large file** - Consider sampling for analysis")
    if not recommendations:
        recommendations.append("**File appears normal** - No immediate concerns detected")
    return recommendations


def _timestamp(generated_at: Optional[datetime]) -> str:
    moment = generated_at or datetime.now(timezone.utc)
    return moment.isoformat().replace("+00:00", "Z")


def _size_mb(analysis: ArtifactClassification) -> str:
    return f"{analysis.size / 1024 / 1024:.2f}"


def render_markdown(analysis: ArtifactClassification, generated_at: Optional[datetime] = None) -> str:
    level = entropy_level(analysis.entropy).capitalize()
    if analysis.suspicious_indicators:
        indicators = "\n".join(f"- {indicator}" for indicator in analysis.suspicious_indicators)
    else:
        indicators = f"- {NO_INDICATORS_LINE}"
    recommendations = "\n\n".join(build_recommendations(analysis))
    return f"""# Forensic Analysis Report

**Generated:** {_timestamp(generated_at)}
**File Type:** {analysis.file_type.value}
**Size:** {_size_mb(analysis)} MB
**Hash:** `{analysis.hash}`
**Entropy:** {analysis.entropy:.2f} ({level})

## Analysis Summary

{analysis.summary}

## Security Indicators

{indicators}

## Technical Details

- **MIME Type:** {analysis.mime_type}
- **File Type Detection:** {analysis.file_type.value}
- **Entropy Analysis:** {analysis.entropy:.2f} bits per byte
- **Security Score:** {security_score(analysis)}/10

## Recommendations

{recommendations}
"""


def render_json(analysis: ArtifactClassification) -> str:
    return json.dumps(analysis.to_dict(), indent=2)


def _strip_bold(text: str) -> str:
    return text.replace("**", "")


def render_html(analysis: ArtifactClassification, generated_at: Optional[datetime] = None) -> str:
    esc = html.escape
    indicator_items = analysis.suspicious_indicators or (NO_INDICATORS_LINE,)
    return f"""<html>
<head>
<meta charset='utf-8'>
<title>{__app_name__} Report</title>
<style>
body {{ font-family: Arial, sans-serif; margin: 20px; }}
table {{ border-collapse: collapse; width: 100%; margin-bottom: 20px; }}
th, td {{ border: 1px solid #ccc; padding: 8px; text-align: left; }}
th {{ background: #f5f5f5; }}
.section {{ margin-bottom: 24px; }}
</style>
</head>
<body>
<h1>{__app_name__} - Forensic Analysis Report</h1>
<p>Version: {__version__} | Generated: {esc(_timestamp(generated_at))}</p>

<div class='section'>
<h2>Artifact</h2>
<table>
<tr><th>File Type</th><td>{esc(analysis.file_type.value)}</td></tr>
<tr><th>Size</th><td>{_size_mb(analysis)} MB</td></tr>
<tr><th>SHA256</th><td>{esc(analysis.hash)}</td></tr>
<tr><th>BLAKE3</th><td>{esc(analysis.blake3)}</td></tr>
<tr><th>Entropy</th><td>{analysis.entropy:.2f} ({entropy_level(analysis.entropy)})</td></tr>
</table>
</div>

<div class='section'>
<h2>Analysis Summary</h2>
<p>{esc(analysis.summary)}</p>
</div>

<div class='section'>
<h2>Security Indicators</h2>
<ul>
{''.join(f"<li>{esc(item)}</li>" for item in indicator_items)}
</ul>
</div>

<div class='section'>
<h2>Technical Details</h2>
<table>
<tr><th>MIME Type</th><td>{esc(analysis.mime_type)}</td></tr>
<tr><th>File Type Detection</th><td>{esc(analysis.file_type.value)}</td></tr>
<tr><th>Entropy Analysis</th><td>{analysis.entropy:.2f} bits per byte</td></tr>
<tr><th>Security Score</th><td>{security_score(analysis)}/10</td></tr>
</table>
</div>

<div class='section'>
<h2>Recommendations</h2>
<ul>
{''.join(f"<li>{esc(_strip_bold(item))}</li>" for item in build_recommendations(analysis))}
</ul>
</div>
</body></html>
"""


def render(analysis: ArtifactClassification, fmt: str = "markdown", generated_at: Optional[datetime] = None) -> str:
    """Render a classification; the timestamp is taken now unless ``generated_at`` is given."""
    fmt = fmt.lower()
    if fmt in ("markdown", "md"):
        return render_markdown(analysis, generated_at)
    if fmt == "json":
        return render_json(analysis)
    if fmt == "html":
        return render_html(analysis, generated_at)
    raise ValueError(f"Unsupported report format: {fmt}")
