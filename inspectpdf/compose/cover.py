"""Cover page composer: the property inspection report form disclosure page."""

from __future__ import annotations

from datetime import datetime

from ..models import InspectionRecord
from .escaping import escape
from .overlays import FormIdentity

NOT_APPLICABLE = "N/A"

_COVER_CSS = """
      * { box-sizing: border-box; }
      html, body { margin: 0; padding: 0; background: #fff; }
      body { font-family: 'Times New Roman', Times, serif; font-size: 14px; line-height: 1.2; color: #000; }
      .page { width: 816px; margin: 0 auto; background: #fff; padding: 16px 24px 14px; }
      .title { text-align: center; font-weight: 900; font-size: 30px; margin: 0 0 12px; text-transform: uppercase; }
      .header-section { border: 3px solid #000; padding: 0 6px 22px; margin-bottom: 12px; }
      .header-grid { display: grid; grid-template-columns: repeat(3, 1fr); column-gap: 24px; row-gap: 10px; margin-top: -4px; }
      .header-field { border-bottom: 1.4px solid #000; min-height: 34px; display: flex; align-items: flex-end; position: relative; }
      .header-field.col-span-2 { grid-column: span 2; }
      .header-field.col-span-3 { grid-column: span 3; }
      .header-field-value { width: 100%; font-size: 13.5px; }
      .header-field-label { position: absolute; left: 0; bottom: -16px; font-size: 12px; font-style: italic; }
      section { margin-top: 6px; margin-bottom: 12px; }
      h2 { font-size: 14px; text-transform: uppercase; font-weight: bold; margin: 0; }
      h2.spaced { margin: 14px 0 5px; }
      p { margin: 6px 0; }
      p.first-p { margin-top: 3px; }
      p.lead { margin-top: 12px; margin-bottom: 0; }
      p.note { font-size: 13px; margin: 6px 0 8px; }
      ul { margin: 0 0 6px 18px; padding: 0; list-style-type: disc; }
      li { margin: 0; padding-left: 12px; }
      a { color: #000; text-decoration: underline; }
      footer { display: flex; gap: 8px; justify-content: space-between; align-items: center; border-top: 1px solid #000;
               margin-top: 12px; padding-top: 5px; font-size: 12px; }
      @media print {
        .page { margin: 0; padding: 8px 12px; }
        footer { display: none !important; }
      }
"""

_INSPECTOR_REQUIRED = (
    "use this Property Inspection Report form for the inspection;",
    "inspect only those components and conditions that are present, visible, and accessible at the time of the inspection;",
    "indicate whether each item was inspected, not inspected, or not present;",
    "indicate an item as Deficient (D) if a condition exists that adversely and materially affects the performance "
    "of a system or component <strong>OR</strong> constitutes a hazard to life, limb or property as specified by the SOPs; and",
    "explain the inspector's findings in the corresponding section in the body of the report form.",
)

_INSPECTOR_NOT_REQUIRED = (
    "identify all potential hazards;",
    "turn on decommissioned equipment, systems, utilities, or apply an open flame or light a pilot to operate any appliance;",
    "climb over obstacles, move furnishings or stored items;",
    "prioritize or emphasize the importance of one deficiency over another;",
    "provide follow-up services to verify that proper repairs have been made; or",
    "inspect any system or component listed under the optional section of the SOPs (22 TAC 535.233).",
)

_INSPECTION_IS_NOT = (
    "a technically exhaustive inspection of the structure, its systems, or its components and may not reveal all deficiencies;",
    "an inspection to verify compliance with any building codes;",
    "an inspection to verify compliance with manufacturer's installation instructions for any system or component; and DOES NOT",
    "imply insurability or warrantability of the structure or its components.",
)


def format_datetime(value: datetime) -> str:
    """Format *value* as ``MM/DD/YYYY h:mmAM``."""

    hour = value.hour % 12 or 12
    suffix = "PM" if value.hour >= 12 else "AM"
    return f"{value:%m/%d/%Y} {hour}:{value:%M}{suffix}"


def _field(value: str, label: str, span: int = 1) -> str:
    css_class = "header-field" if span == 1 else f"header-field col-span-{span}"
    return f"""
          <div class="{css_class}">
            <div class="header-field-value">{escape(value)}</div>
            <div class="header-field-label">{escape(label)}</div>
          </div>"""


def _bullets(items: tuple[str, ...]) -> str:
    # Items are static form text and may carry inline emphasis.
    return "".join(f"\n          <li>{item}</li>" for item in items)


def compose_cover(record: InspectionRecord, identity: FormIdentity | None = None) -> str:
    """Return the cover page markup for *record*."""

    identity = identity or FormIdentity()
    header_fields = "".join(
        (
            _field(record.client.name, "Name of Client", span=2),
            _field(format_datetime(record.scheduled_at), "Date of Inspection"),
            _field(record.address.full_address, "Address of Inspected Property", span=3),
            _field(record.inspector.name, "Name of Inspector", span=2),
            _field(record.inspector.license_number or NOT_APPLICABLE, "TREC License #"),
            _field(NOT_APPLICABLE, "Name of Sponsor (if applicable)", span=2),
            _field(NOT_APPLICABLE, "TREC License #"),
        )
    )

    return f"""<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>PROPERTY INSPECTION REPORT FORM</title>
    <style>{_COVER_CSS}    </style>
  </head>
  <body>
    <div class="page" role="document" aria-label="Property Inspection Report Form">
      <div class="title">PROPERTY INSPECTION REPORT FORM</div>

      <section class="header-section" aria-label="Report Header">
        <div class="header-grid">{header_fields}
        </div>
      </section>

      <section>
        <h2>Purpose of Inspection</h2>
        <p class="first-p">
          A real estate inspection is a visual survey of a structure and a basic performance evaluation of the
          systems and components of a building. It provides information regarding the general condition of a
          residence at the time the inspection was conducted. <strong>It is important</strong> that you carefully
          read ALL of this information. Ask the inspector to clarify any items or comments that are unclear.
        </p>
      </section>

      <section>
        <h2>Responsibility of the Inspector</h2>
        <p class="first-p">
          This inspection is governed by the Texas Real Estate Commission (TREC) Standards of Practice (SOPs),
          which dictates the minimum requirements for a real estate inspection.
        </p>
        <p class="lead">The inspector <strong>IS required</strong> to:</p>
        <ul>{_bullets(_INSPECTOR_REQUIRED)}
        </ul>
        <p class="lead">The inspector <strong>IS NOT required</strong> to:</p>
        <ul>{_bullets(_INSPECTOR_NOT_REQUIRED)}
        </ul>
      </section>

      <section>
        <h2 class="spaced">Responsibility of the Client</h2>
        <p>
          While items identified as Deficient (D) in an inspection report DO NOT obligate any party to make
          repairs or take other actions, in the event that any further evaluations are needed, it is the
          responsibility of the client to obtain further evaluations and/or cost estimates from qualified service
          professionals regarding any items reported as Deficient (D). It is recommended that any further
          evaluations and/or cost estimates take place prior to the expiration of any contractual time
          limitations, such as option periods.
        </p>
        <p class="note">
          <strong>Please Note:</strong> Evaluations performed by service professionals in response to items
          reported as Deficient (D) on the report may lead to the discovery of additional deficiencies that were
          not present, visible, or accessible at the time of the inspection. Any repairs made after the date of
          the inspection may render information contained in this report obsolete or invalid.
        </p>
      </section>

      <section>
        <h2 class="spaced">Report Limitations</h2>
        <p>
          This report is provided for the benefit of the named client and is based on observations made by the
          named inspector on the date the inspection was performed (indicated above).
        </p>
        <p>ONLY those items specifically noted as being inspected on the report were inspected.</p>
        <p class="lead">This inspection is NOT:</p>
        <ul>{_bullets(_INSPECTION_IS_NOT)}
        </ul>
      </section>

      <footer role="contentinfo">
        <div>{escape(identity.form_code)}</div>
        <div>{escape(identity.promulgation)}</div>
      </footer>
    </div>
  </body>
</html>
"""


__all__ = ["compose_cover", "format_datetime"]
