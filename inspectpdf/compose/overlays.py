"""Header and footer overlay templates.

Chromium prints overlays outside the document, once per physical page, and
substitutes the contents of elements carrying the ``pageNumber`` and
``totalPages`` classes. Overlays do not inherit the document's stylesheet, so
each one carries its own ``<style>`` block.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models import InspectionRecord, InspectionStatus
from .escaping import escape

EMPTY_OVERLAY = "<div></div>"


@dataclass(frozen=True)
class FormIdentity:
    """Static form identification printed at the foot of every page."""

    form_code: str = "REI 7-6 (8/9/2021)"
    promulgation: str = (
        "Promulgated by the Texas Real Estate Commission • (512) 936-3000 • www.trec.texas.gov"
    )


@dataclass(frozen=True)
class Overlays:
    cover_header: str | None
    cover_footer: str | None
    body_header: str | None
    body_footer: str | None


def format_date(record: InspectionRecord) -> str:
    return record.scheduled_at.strftime("%m/%d/%Y")


def cover_footer(identity: FormIdentity) -> str:
    return f"""
      <style>
        .pdf-footer {{ font-family: 'Times New Roman', Times, serif; font-size: 12px; width: 100%;
                      display: flex; justify-content: space-between; align-items: center; padding: 0 10mm; }}
      </style>
      <div class="pdf-footer">
        <div>{escape(identity.form_code)}</div>
        <div>{escape(identity.promulgation)}</div>
      </div>"""


def body_header(record: InspectionRecord) -> str:
    legend = "".join(
        f"<span>{status.value}={escape(status.description)}</span>" for status in InspectionStatus
    )
    boxes = "".join(f"<span>{status.value}</span>" for status in InspectionStatus)
    return f"""
      <style>
        .pdf-header {{ font-family: 'Times New Roman', Times, serif; font-size: 13px; width: 100%; padding: 4px 12mm 0 12mm; }}
        .pdf-header .legend {{ display: flex; gap: 45px; font-weight: 700; margin-top: 3px; margin-left: 3px; padding: 1px 7.5px; }}
        .pdf-header .box {{ margin-top: 2px; border: 2px solid #000; display: flex; justify-content: flex-start; gap: 12.5px; padding: 1px 8.5px; font-weight: 700; width: 100%; }}
      </style>
      <div class="pdf-header">
        <div style="margin-left: 3px;">Report: {escape(record.address.full_address)} - {escape(format_date(record))}</div>
        <div class="legend">{legend}</div>
        <div class="box">{boxes}</div>
      </div>"""


def body_footer(identity: FormIdentity) -> str:
    return f"""
      <style>
        .pdf-footer {{ font-family: 'Times New Roman', Times, serif; width: 100%; padding: 0 10mm; }}
        .pdf-footer .page-number {{ font-size: 14px; text-align: center; margin-bottom: 4px; }}
        .pdf-footer .bottom-line {{ font-size: 12px; display: flex; justify-content: space-between; align-items: center; }}
      </style>
      <div class="pdf-footer">
        <div class="page-number">Page <span class="pageNumber"></span> of <span class="totalPages"></span></div>
        <div class="bottom-line">
          <div>{escape(identity.form_code)}</div>
          <div>{escape(identity.promulgation)}</div>
        </div>
      </div>"""


def build_overlays(record: InspectionRecord, identity: FormIdentity | None = None) -> Overlays:
    """Return the per-run overlays for both documents of *record*."""

    identity = identity or FormIdentity()
    return Overlays(
        cover_header=None,
        cover_footer=cover_footer(identity),
        body_header=body_header(record),
        body_footer=body_footer(identity),
    )


__all__ = [
    "EMPTY_OVERLAY",
    "FormIdentity",
    "Overlays",
    "build_overlays",
    "format_date",
    "cover_footer",
    "body_header",
    "body_footer",
]
