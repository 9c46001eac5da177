"""Email template builder for the itinerary HTML email."""

from datetime import datetime
from html import escape
from typing import cast

from itinerary_share.schemas.itinerary import DayPlan, DisplayValue, ItineraryRecord

GREETING_FALLBACK = "Traveler"
TITLE_FALLBACK = "Your Trip"
NOT_AVAILABLE = "N/A"
TO_BE_DECIDED = "TBD"
NO_ACTIVITIES = "No activities planned yet"


def _present(value: DisplayValue) -> bool:
    return value is not None and str(value).strip() != ""


def _text(value: DisplayValue, fallback: str = NOT_AVAILABLE) -> str:
    """Escape a display value for HTML, or return the fallback when absent."""
    return escape(str(value)) if _present(value) else fallback


def _multiline(value: DisplayValue) -> str:
    """Escape free text and keep its line breaks."""
    return "<br>\n".join(escape(line) for line in str(value).splitlines())


class ItineraryEmailBuilder:
    """
    Builder for the itinerary email sent to clients.

    The output is a single self-contained HTML document with inline styles.
    Every interpolated value coming from the itinerary or the caller is
    HTML-escaped.
    """

    # ==========================================================================
    # Email Template Styles - Reusable CSS Constants
    # ==========================================================================
    EMAIL_STYLES: dict[str, str | dict[str, str]] = {
        # Brand Colors
        "color_primary": "#0081A7",
        "color_accent": "#F07167",
        "color_details_bg": "#FDFCDC",
        "color_day_bg": "#FED9B7",
        "color_text_primary": "#333333",
        "color_text_secondary": "#666666",
        "color_bg_container": "#ffffff",
        # Typography
        "font_stack": "Arial, sans-serif",
        "font_size_small": "14px",
        "font_size_footer": "12px",
        "line_height_base": "1.6",
        # Layout
        "max_width_container": "600px",
        "padding_page_mobile": "10px",
        "padding_page_desktop": "20px",
        "padding_content_mobile": "15px",
        "padding_content_desktop": "20px",
        # Component-specific styles
        "trip_details": {
            "padding": "15px",
            "border_radius": "8px",
            "margin": "15px 0",
        },
        "daily_plan": {
            "padding": "12px",
            "border_radius": "6px",
            "margin": "10px 0",
        },
    }

    def _get_base_template(self) -> str:
        """
        Get the base email template with CSS styles.

        Returns:
            str: The base email template HTML with placeholders.
        """
        return """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{ font-family: {font_stack}; line-height: {line_height}; color: {color_text_primary}; margin: 0; padding: {padding_page_desktop}; }}
        .container {{ max-width: {max_width}; margin: 0 auto; background: {color_bg_container}; }}
        .header {{ background: {color_primary}; color: white; padding: 20px; text-align: center; }}
        .content {{ padding: {padding_content_desktop}; }}
        .trip-details {{ background: {color_details_bg}; padding: {details_padding}; border-radius: {details_radius}; margin: {details_margin}; }}
        .daily-plan {{ background: {color_day_bg}; padding: {day_padding}; border-radius: {day_radius}; margin: {day_margin}; border-left: 4px solid {color_primary}; }}
        .detail-row {{ margin: 8px 0; }}
        .label {{ font-weight: bold; color: {color_primary}; }}
        .custom-message {{ background: {color_day_bg}; padding: {details_padding}; border-radius: {details_radius}; margin: {details_margin}; border-left: 4px solid {color_accent}; }}
        .footer {{ text-align: center; padding: 20px; color: {color_text_secondary}; font-size: {font_footer}; }}
        .day-header {{ color: {color_primary}; font-weight: bold; margin-bottom: 5px; }}
        .weather {{ color: {color_text_secondary}; font-size: {font_small}; margin-bottom: 5px; }}
        .activities {{ margin-top: 8px; }}
        @media only screen and (max-width: 480px) {{
            body {{ padding: {padding_page_mobile}; }}
            .content {{ padding: {padding_content_mobile}; }}
        }}
    </style>
</head>
<body>
    {body_content}
</body>
</html>
"""

    def build_template(
        self,
        title: str,
        header_html: str,
        content_html: str,
        footer_html: str,
    ) -> str:
        """
        Build the complete email template with provided components.

        Args:
            title: The email title for the HTML head.
            header_html: The header section HTML.
            content_html: The main content section HTML.
            footer_html: The footer section HTML.

        Returns:
            str: The complete formatted HTML email.
        """
        body_content = f"""
    <div class="container">
        {header_html}
        {content_html}
        {footer_html}
    </div>
        """.strip()

        styles = self.EMAIL_STYLES
        details_styles = cast("dict[str, str]", styles["trip_details"])
        day_styles = cast("dict[str, str]", styles["daily_plan"])

        return self._get_base_template().format(
            title=title,
            font_stack=styles["font_stack"],
            line_height=styles["line_height_base"],
            color_text_primary=styles["color_text_primary"],
            color_text_secondary=styles["color_text_secondary"],
            color_bg_container=styles["color_bg_container"],
            color_primary=styles["color_primary"],
            color_accent=styles["color_accent"],
            color_details_bg=styles["color_details_bg"],
            color_day_bg=styles["color_day_bg"],
            max_width=styles["max_width_container"],
            padding_page_mobile=styles["padding_page_mobile"],
            padding_page_desktop=styles["padding_page_desktop"],
            padding_content_mobile=styles["padding_content_mobile"],
            padding_content_desktop=styles["padding_content_desktop"],
            details_padding=details_styles["padding"],
            details_radius=details_styles["border_radius"],
            details_margin=details_styles["margin"],
            day_padding=day_styles["padding"],
            day_radius=day_styles["border_radius"],
            day_margin=day_styles["margin"],
            font_small=styles["font_size_small"],
            font_footer=styles["font_size_footer"],
            body_content=body_content,
        )

    def build_header(self) -> str:
        """Build the email header HTML."""
        return """<div class="header">
            <h1>Your Travel Itinerary</h1>
            <p>Prepared with care for your upcoming adventure</p>
        </div>"""

    def build_footer(self, sent_on: str, itinerary_id: str) -> str:
        """
        Build the email footer HTML.

        Args:
            sent_on: Formatted rendering timestamp.
            itinerary_id: Escaped itinerary identifier.

        Returns:
            str: The footer HTML section.
        """
        return f"""<div class="footer">
            <p>This itinerary was sent on {sent_on}</p>
            <p>Itinerary ID: {itinerary_id}</p>
        </div>"""

    def build_greeting(self, client_name: DisplayValue) -> str:
        """Greet the client by the first word of their name."""
        first_name = str(client_name).split()[0] if _present(client_name) else GREETING_FALLBACK
        return f"<p>Dear {escape(first_name)},</p>"

    def build_custom_message(self, message: str) -> str:
        """Build the personal message block shown under the greeting."""
        return f"""<div class="custom-message">
                <p><strong>Personal Message:</strong></p>
                <p>{_multiline(message)}</p>
            </div>"""

    def build_detail_row(self, label: str, value: str) -> str:
        return f"""<div class="detail-row">
                    <span class="label">{label}:</span> {value}
                </div>"""

    def build_trip_details(self, record: ItineraryRecord) -> str:
        """
        Build the summary block with the trip's scalar fields.

        Dates fall back to "TBD", other absent values to "N/A". The status row
        is left out entirely when there is no status.
        """
        dates = (
            f"{_text(record.start_date, TO_BE_DECIDED)} to {_text(record.end_date, TO_BE_DECIDED)}"
        )
        rows = [
            self.build_detail_row("Client", _text(record.client_name)),
            self.build_detail_row("Destination", _text(record.destination)),
            self.build_detail_row("Travel Dates", dates),
            self.build_detail_row("Number of Travelers", _text(record.number_of_travelers)),
            self.build_detail_row("Trip Type", _text(record.trip_type)),
        ]
        if _present(record.status):
            rows.append(self.build_detail_row("Status", _text(record.status)))
        rows.append(self.build_detail_row("Itinerary ID", _text(record.id)))

        rows_html = "\n                ".join(rows)
        return f"""<div class="trip-details">
                <h2 style="color: #0081A7; margin-top: 0;">{_text(record.trip_title, TITLE_FALLBACK)}</h2>
                {rows_html}
            </div>"""

    def build_notes(self, notes: DisplayValue) -> str:
        return f"""<div class="trip-details">
                <h3 style="color: #0081A7;">Notes:</h3>
                <p>{_multiline(notes)}</p>
            </div>"""

    def build_day_plan(self, day_number: int, day: DayPlan) -> str:
        """
        Build one day block.

        Args:
            day_number: 1-based position of the day in the itinerary.
            day: The day's plan.

        Returns:
            str: The day block HTML.
        """
        parts = [
            '<div class="daily-plan">',
            f'    <div class="day-header">Day {day_number} - {_text(day.date, TO_BE_DECIDED)}</div>',
        ]
        if _present(day.weather):
            parts.append(f'    <div class="weather">Weather: {_text(day.weather)}</div>')
        if _present(day.activities):
            parts.append(
                '    <div class="activities"><strong>Activities:</strong><br>\n'
                f"    {_multiline(day.activities)}</div>",
            )
        else:
            parts.append(f'    <div class="activities"><em>{NO_ACTIVITIES}</em></div>')
        parts.append("</div>")
        return "\n                ".join(parts)

    def build_daily_plans(self, days: list[DayPlan]) -> str:
        days_html = "\n                ".join(
            self.build_day_plan(number, day) for number, day in enumerate(days, start=1)
        )
        return f"""<div class="trip-details">
                <h3 style="color: #0081A7;">Daily Itinerary:</h3>
                {days_html}
            </div>"""

    def build_content(self, record: ItineraryRecord, custom_message: str | None) -> str:
        """
        Build the main content section.

        Optional sections are only emitted when they have data.
        """
        parts = ['<div class="content">', self.build_greeting(record.client_name)]

        if custom_message:
            parts.append(self.build_custom_message(custom_message))

        parts.append("<p>Here are the complete details for your upcoming trip:</p>")
        parts.append(self.build_trip_details(record))

        if _present(record.notes):
            parts.append(self.build_notes(record.notes))

        if record.daily_plans:
            parts.append(self.build_daily_plans(record.daily_plans))

        parts.extend(
            [
                "<p>If you have any questions or would like to make changes, "
                "please don't hesitate to reach out on our Contact page!</p>",
                "<p>Best regards,<br>Your Travel Agent</p>",
                "</div>",
            ],
        )
        return "\n            ".join(parts)

    def build_itinerary_email(
        self,
        record: ItineraryRecord,
        custom_message: str | None = None,
        sent_at: datetime | None = None,
    ) -> str:
        """
        Build the complete itinerary email HTML.

        Args:
            record: The itinerary to render.
            custom_message: Optional personal note from the travel agent.
            sent_at: Rendering time shown in the footer; defaults to now.

        Returns:
            str: The complete HTML email.
        """
        sent_at = sent_at or datetime.now().astimezone()
        return self.build_template(
            title="Your Travel Itinerary",
            header_html=self.build_header(),
            content_html=self.build_content(record, custom_message),
            footer_html=self.build_footer(
                sent_on=sent_at.strftime("%Y-%m-%d %H:%M"),
                itinerary_id=_text(record.id),
            ),
        )


_builder = ItineraryEmailBuilder()


def render_itinerary_email(
    record: ItineraryRecord,
    custom_message: str | None = None,
    sent_at: datetime | None = None,
) -> str:
    """Render the itinerary email with the shared builder."""
    return _builder.build_itinerary_email(record, custom_message, sent_at)


def build_subject(record: ItineraryRecord) -> str:
    """Return the plain-text email subject for an itinerary."""
    title = str(record.trip_title).strip() if _present(record.trip_title) else TITLE_FALLBACK
    return f"Your {title} Itinerary"
