"""Body composer: one block per section, one lettered entry per line item.

The composer is a pure function of the record. All record text passes
through :func:`~inspectpdf.compose.escaping.escape`; nothing else in this
module emits untrusted content.
"""

from __future__ import annotations

from string import ascii_uppercase

from ..models import Comment, InspectionRecord, InspectionStatus, LineItem, MediaRef, Section
from .escaping import escape, paragraphs
from .overlays import format_date

_BODY_CSS = """
      :root { --page-w: 816px; --ink: #000; }
      * { box-sizing: border-box; }
      html, body { margin: 0; padding: 0; background: #fff; color: var(--ink); }
      body { font: 14px/1.45 'Times New Roman', Times, serif; }
      .page { width: var(--page-w); margin: 20px auto; background: #fff; padding: 16px 24px 14px; }
      .top-id { font-size: 13.5px; margin-left: 15px; margin-bottom: 4px; }
      .legend { font-size: 13.5px; margin: 5px 2px; padding: 1px 6px; display: flex; gap: 50px; }
      .legend-box { font-size: 13.5px; margin: 2px 0; padding: 0 6px; border: 2.5px solid var(--ink); display: flex; gap: 15px; }
      .sec-title { text-align: center; font-size: 16px; font-weight: 800; text-transform: uppercase;
                   margin: 12px 0 10px 0; letter-spacing: 0.2px; break-after: avoid; page-break-after: avoid; }
      .line-item-header { break-inside: avoid; page-break-inside: avoid; break-after: avoid; page-break-after: avoid; }
      .checkbox-row { display: grid; grid-template-columns: auto 1fr; margin: 10px 4px; gap: 20px; break-inside: avoid; }
      .checkbox-group { display: flex; gap: 14px; align-items: center; }
      .chk { width: 14px; height: 14px; appearance: none; -webkit-appearance: none; border: 1.5px solid #000;
             display: inline-block; vertical-align: middle; margin: 0; position: relative; flex-shrink: 0; }
      .chk:checked::after { content: '✕'; position: absolute; inset: -2px 0.5px; font-size: 14px; line-height: 14px;
                            display: block; text-align: center; }
      .alpha-title { font-weight: 800; font-size: 14px; }
      .subhead-main { display: block; margin-left: calc(14px * 4 + 14px * 3 + 20px); }
      .comment-block { margin: 8px 0; }
      .label { font-style: italic; font-weight: 600; }
      p { margin: 6px 0 8px; widows: 2; orphans: 2; }
      .checklist-group { margin: 8px 0; display: flex; flex-direction: column; gap: 6px; }
      .checklist-item { display: flex; align-items: center; gap: 8px; }
      .media-row { display: flex; flex-wrap: wrap; gap: 12px; margin: 12px 0; break-inside: avoid; page-break-inside: avoid; }
      .media-item { max-width: 300px; break-inside: avoid; page-break-inside: avoid; }
      .media-item img, .media-item video { max-width: 100%; height: auto; border: 1px solid #ccc; display: block; }
      .video-link { display: block; text-decoration: none; position: relative; }
      .video-thumbnail { position: relative; display: inline-block; max-width: 100%; }
      .play-button-overlay { position: absolute; top: 50%; left: 50%; transform: translate(-50%, -50%); opacity: 0.9; }
      .media-caption { font-size: 12px; font-style: italic; color: #666; margin-top: 4px; }
      .footer { margin-top: 14px; text-align: center; font-size: 13px; }
      .bottom-bar { display: flex; justify-content: space-between; align-items: center; font-size: 12.5px;
                    border-top: 1px solid #000; padding-top: 6px; margin-top: 6px; }
      @media print {
        .page { margin: 0; padding: 8px 12px; }
        .section-container:first-child .sec-title { margin-top: 0; }
        .top-id, .legend, .legend-box, .footer { display: none !important; }
      }
"""

_PLAY_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="white" width="60" height="60">'
    '<circle cx="12" cy="12" r="12" fill="rgba(0,0,0,0.7)" />'
    '<polygon points="9,6 9,18 18,12" fill="white" />'
    "</svg>"
)


def alpha_label(index: int) -> str:
    """Return the letter label for the zero-based *index*: A..Z, AA, AB, ..."""

    if index < 0:
        raise ValueError("index must not be negative")
    label = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        label = ascii_uppercase[remainder] + label
    return label


def _checkbox(checked: bool, aria_label: str) -> str:
    checked_attr = ' checked="checked"' if checked else ""
    return f'<input class="chk" type="checkbox"{checked_attr} aria-label="{escape(aria_label)}" />'


def status_checkboxes(status: InspectionStatus | None) -> str:
    return "\n              ".join(_checkbox(status is option, option.description) for option in InspectionStatus)


def _checklist_comment(comment: Comment) -> str:
    items = "".join(
        f"""
        <div class="checklist-item">
          {_checkbox(comment.is_selected(option), option)}
          <span>{escape(option)}</span>
        </div>"""
        for option in comment.options
    )
    return f"""
      <div class="comment-block">
        <p><span class="label">{escape(comment.label)}:</span></p>
        <div class="checklist-group">{items}
        </div>
      </div>"""


def _narrative_comment(comment: Comment) -> str:
    body = "".join(f"\n        <p>{line}</p>" for line in paragraphs(comment.display_text))
    location = ""
    if comment.location:
        location = f"\n        <p><strong>Location:</strong> {escape(comment.location)}</p>"
    return f"""
      <div class="comment-block">
        <p><span class="label">{escape(comment.label)}:</span></p>{body}{location}
      </div>"""


def _caption(media: MediaRef) -> str:
    caption = media.display_caption
    if not caption:
        return ""
    return f'\n          <div class="media-caption">{escape(caption)}</div>'


def _photo(photo: MediaRef) -> str:
    return f"""
        <div class="media-item">
          <img src="{escape(photo.url)}" alt="{escape(photo.display_caption)}" />{_caption(photo)}
        </div>"""


def _video(video: MediaRef) -> str:
    # Printed as a linked thumbnail; PDFs cannot play video.
    return f"""
        <div class="media-item">
          <a href="{escape(video.url)}" class="video-link" title="Click to watch video">
            <div class="video-thumbnail">
              <video src="{escape(video.url)}" preload="metadata"></video>
              <div class="play-button-overlay">{_PLAY_ICON}</div>
            </div>
          </a>{_caption(video)}
        </div>"""


def media_rows(comment: Comment) -> str:
    rows = []
    if comment.photos:
        rows.append(f'\n      <div class="media-row">{"".join(_photo(p) for p in comment.photos)}\n      </div>')
    if comment.videos:
        rows.append(f'\n      <div class="media-row">{"".join(_video(v) for v in comment.videos)}\n      </div>')
    return "".join(rows)


def compose_line_item(line_item: LineItem, index: int) -> str:
    html = f"""
      <div class="line-item-header">
        <div class="checkbox-row">
          <div class="checkbox-group">
              {status_checkboxes(line_item.status)}
          </div>
          <div class="alpha-title">{alpha_label(index)}. {escape(line_item.display_name)}</div>
        </div>
      </div>"""

    if not line_item.comments:
        return html

    parts = []
    for comment in line_item.comments:
        parts.append(_checklist_comment(comment) if comment.is_checklist else _narrative_comment(comment))
        parts.append(media_rows(comment))
    return f'{html}\n      <div class="subhead-main">{"".join(parts)}\n      </div>'


def compose_section(section: Section) -> str:
    title = f"{escape(section.section_number)}. {escape(section.name.upper())}"
    items = "".join(compose_line_item(item, index) for index, item in enumerate(section.line_items))
    return f"""
    <div class="section-container">
      <div class="sec-title">{title}</div>{items}
    </div>"""


def compose_body(record: InspectionRecord) -> str:
    """Return the markup of every inspection section of *record*, in order."""

    sections = "".join(compose_section(section) for section in record.sections)
    legend = "".join(
        f'\n        <span class="legend-item"><strong>{status.value}={escape(status.description)}</strong></span>'
        for status in InspectionStatus
    )
    boxes = "".join(
        f'\n        <span class="legend-box-item"><strong>{status.value}</strong></span>' for status in InspectionStatus
    )
    account = record.account

    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Inspection Report</title>
    <style>{_BODY_CSS}    </style>
  </head>
  <body>
    <div class="page" role="document" aria-label="Inspection Report">
      <div class="top-id">Report Identification: {escape(record.address.full_address)} - {escape(format_date(record))}</div>
      <div class="legend">{legend}
      </div>
      <div class="legend-box">{boxes}
      </div>
{sections}
      <div class="footer">
        <div class="bottom-bar">
          <div>{escape(account.company_name)} • {escape(account.phone)}</div>
          <div>{escape(account.email)}</div>
        </div>
      </div>
    </div>
  </body>
</html>
"""


__all__ = ["compose_body", "compose_section", "compose_line_item", "alpha_label", "status_checkboxes", "media_rows"]
