"""
HTML templates for guest, owner and pre-arrival emails
"""
from datetime import date
from html import escape
from app.models.property import PropertyCategory, PropertyContent

GUEST_STYLE = """
    body { font-family: Georgia, serif; color: #1a1a1a; line-height: 1.7; max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { text-align: center; padding: 30px 0; border-bottom: 1px solid #e5e5e5; }
    .logo { font-size: 24px; letter-spacing: 0.2em; font-weight: normal; }
    .content { padding: 30px 0; }
    h1 { font-size: 24px; font-weight: normal; margin-bottom: 10px; }
    .subtitle { color: #6b6b6b; font-size: 14px; margin-bottom: 30px; }
    .details { background: #faf8f5; padding: 25px; margin: 25px 0; }
    .detail-row { padding: 8px 0; border-bottom: 1px solid #e5e5e5; }
    .label { color: #6b6b6b; font-size: 11px; text-transform: uppercase; letter-spacing: 0.1em; display: block; margin-bottom: 4px; }
    .value { font-size: 15px; }
    .action-box { background: #1a1a1a; padding: 25px; margin: 30px 0; text-align: center; }
    .action-box h2 { color: #ffffff; font-size: 16px; font-weight: normal; margin: 0 0 10px 0; }
    .action-box p { color: #cccccc; font-size: 14px; margin: 0 0 20px 0; }
    .btn { display: inline-block; padding: 14px 32px; background: #ffffff; color: #1a1a1a; text-decoration: none; font-size: 13px; text-transform: uppercase; letter-spacing: 0.1em; }
    .confirmed-box { background: #f0f7f0; padding: 20px; margin: 25px 0; text-align: center; }
    .confirmed-time { font-size: 20px; }
    .section h3 { font-size: 12px; text-transform: uppercase; letter-spacing: 0.15em; color: #6b6b6b; font-weight: normal; }
    .footer { text-align: center; padding: 30px 0; border-top: 1px solid #e5e5e5; color: #6b6b6b; font-size: 12px; }
"""

OWNER_STYLE = """
    body { font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; color: #1a1a1a; line-height: 1.6; max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background: #1a1a1a; color: #fff; padding: 20px; text-align: center; }
    .highlight { background: #f0f7f0; padding: 15px; margin: 15px 0; border-left: 4px solid #4a5043; }
    table { width: 100%; border-collapse: collapse; margin: 20px 0; }
    th, td { text-align: left; padding: 10px; border-bottom: 1px solid #e5e5e5; }
    th { font-size: 11px; text-transform: uppercase; letter-spacing: 0.1em; color: #6b6b6b; }
    .amount { font-size: 24px; font-weight: bold; color: #4a5043; }
    .btn { display: inline-block; padding: 12px 24px; background: #1a1a1a; color: #fff; text-decoration: none; font-size: 12px; text-transform: uppercase; }
"""

CONTACT_LINE = "Zahra is available on WhatsApp: <strong>+212 6 19 11 20 08</strong>"

RIAD_ARRIVAL_STEPS = (
    ("Tell your driver: Café Medina Rouge",
     "It faces the Koutoubia Mosque, near Parking Bennani. All taxi drivers know it."),
    ("Enter the alley beside the café",
     "Walk straight for about 100 meters (2 minutes)."),
    ("Look for our door: 35–37 Derb Fhal Zefriti",
     "A wooden door on your left. Knock or ring the bell, we'll be waiting."),
)


def format_date(value: str) -> str:
    """Render 'YYYY-MM-DD' as 'Tuesday, June 10, 2025'; other strings are returned as-is"""
    try:
        parsed = date.fromisoformat(str(value)[:10])
    except (TypeError, ValueError):
        return value or ""
    return f"{parsed.strftime('%A, %B')} {parsed.day}, {parsed.year}"


def format_amount(value) -> str:
    """Thousands-separated amount without a trailing .0"""
    if value is None or value == "":
        return "0"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return str(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.2f}"


def plural(count, word: str) -> str:
    try:
        many = int(count) > 1
    except (TypeError, ValueError):
        many = False
    return f"{count} {word}{'s' if many else ''}"


def _page(style: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n  <meta charset=\"utf-8\">\n"
        f"  <style>{style}</style>\n</head>\n<body>\n{body}\n</body>\n</html>\n"
    )


def _detail_rows(rows) -> str:
    return "\n".join(
        f'<div class="detail-row"><span class="label">{label}</span>'
        f'<span class="value">{value}</span></div>'
        for label, value in rows
    )


def _footer(content: PropertyContent) -> str:
    return f'<div class="footer"><p>{content.footer}</p><p>riaddisiena.com</p></div>'


def render_guest_confirmation(data, content: PropertyContent, arrival_url: str) -> tuple:
    """Return (subject, html) for the guest booking confirmation"""
    directions = "\n".join(f"<p>{paragraph}</p>" for paragraph in content.directions)
    details = _detail_rows([
        ("Booking Reference", escape(data.booking_id)),
        ("Tent" if data.tent else "Room", escape(data.accommodation_name())),
        ("Check-in", f"{escape(format_date(data.check_in))} from {content.check_in_time}"),
        ("Check-out", f"{escape(format_date(data.check_out))} by {content.check_out_time}"),
        ("Guests", f"{plural(data.guests, 'guest')} · {plural(data.nights, 'night')}"),
        ("Total Paid", f"€{format_amount(data.total)}"),
    ])
    body = f"""
  <div class="header"><div class="logo">{content.name.upper()}</div></div>
  <div class="content">
    <h1>Your reservation is confirmed</h1>
    <p class="subtitle">{content.subtitle}</p>
    <div class="details">
{details}
    </div>
    <div class="action-box">
      <h2>One quick step</h2>
      <p>Please confirm your arrival time so we can prepare for you.</p>
      <a href="{escape(arrival_url)}" class="btn">Confirm Arrival Time</a>
    </div>
    <div class="section"><h3>Getting Here</h3>{directions}</div>
    <div class="section"><h3>Questions?</h3><p>{CONTACT_LINE}</p></div>
    <p>We look forward to welcoming you.</p>
    <p>Warmly,<br>{content.signoff}</p>
  </div>
  {_footer(content)}"""
    subject = f"Your reservation at {content.name}"
    return subject, _page(GUEST_STYLE, body)


def render_owner_notification(data, admin_url: str) -> tuple:
    """Return (subject, html) for the operator booking summary"""
    guest = escape(f"{data.first_name} {data.last_name}".strip())
    accommodation = escape(data.accommodation_name())
    total = format_amount(data.total)
    rows = [
        ("Booking ID", escape(data.booking_id)),
        ("Guest", guest),
        ("Email", f'<a href="mailto:{escape(data.email)}">{escape(data.email)}</a>'),
    ]
    if data.phone:
        rows.append(("Phone", escape(data.phone)))
    rows += [
        ("Property", escape(data.property)),
        ("Accommodation", accommodation),
        ("Check-in", escape(format_date(data.check_in))),
        ("Check-out", escape(format_date(data.check_out))),
        ("Nights", escape(str(data.nights))),
        ("Guests", escape(str(data.guests))),
        ("Total", f"<strong>€{total}</strong>"),
    ]
    if data.paypal_order_id:
        rows.append(("PayPal Order", escape(data.paypal_order_id)))
    if data.message:
        rows.append(("Message", escape(data.message)))

    table = "\n".join(f"<tr><th>{label}</th><td>{value}</td></tr>" for label, value in rows)
    body = f"""
  <div class="header"><h1>NEW BOOKING</h1></div>
  <div class="content">
    <div class="highlight">
      <strong>{guest}</strong> just booked <strong>{accommodation}</strong> at <strong>{escape(data.property)}</strong>
    </div>
    <p class="amount">€{total}</p>
    <table>
{table}
    </table>
    <a href="{escape(admin_url)}" class="btn">View in Admin</a>
  </div>"""
    subject = (
        f"New Booking: {data.first_name} {data.last_name} - €{total} - "
        f"{data.accommodation_name()}"
    )
    return subject, _page(OWNER_STYLE, body)


def render_pre_arrival(data, content: PropertyContent, arrival_url: str) -> tuple:
    """Return (subject, html) for the pre-arrival reminder"""
    if data.arrival_time_confirmed and data.confirmed_time:
        arrival_section = f"""
    <div class="confirmed-box">
      <span class="label">Your arrival time</span>
      <span class="confirmed-time">{escape(data.confirmed_time)}</span>
      <p>We'll be ready for you. If plans change, just reply to this email.</p>
    </div>"""
    else:
        arrival_section = f"""
    <div class="action-box">
      <h2>Please confirm your arrival time</h2>
      <p>We haven't received your arrival time yet. This helps us prepare for you.</p>
      <a href="{escape(arrival_url)}" class="btn">Confirm Arrival Time</a>
    </div>"""

    summary = _detail_rows([
        ("Check-in", f"{escape(format_date(data.check_in))} from {content.check_in_time}"),
        ("Check-out", f"{escape(format_date(data.check_out))} by {content.check_out_time}"),
        ("Room", escape(data.room)),
        ("Reference", escape(data.booking_id)),
    ])

    if PropertyCategory.classify(data.property) is PropertyCategory.RIAD:
        steps = "\n".join(
            f"<p><strong>{i}. {title}</strong><br>{hint}</p>"
            for i, (title, hint) in enumerate(RIAD_ARRIVAL_STEPS, start=1)
        )
        directions = (
            f"<h3>Step-by-step directions</h3>{steps}"
            "<p>If you arrive after 5:00 PM, we'll send you self-check-in instructions with a door code.</p>"
        )
    else:
        directions = "<h3>Getting Here</h3>" + "".join(f"<p>{p}</p>" for p in content.directions)

    body = f"""
  <div class="header"><div class="logo">{content.name.upper()}</div></div>
  <div class="content">
    <h1>Preparing for your arrival</h1>
    <p class="subtitle">Your stay is approaching. Here's everything you need for a smooth arrival.</p>
    <div class="details">
{summary}
    </div>
{arrival_section}
    <div class="section">{directions}</div>
    <div class="section"><h3>Contact</h3><p>{CONTACT_LINE}<br>Available 8:00 AM – 5:00 PM</p></div>
    <p>Safe travels. We'll see you soon.</p>
    <p>Warmly,<br>{content.signoff}</p>
  </div>
  {_footer(content)}"""

    if data.arrival_time_confirmed:
        subject = f"Preparing for your arrival on {format_date(data.check_in)}"
    else:
        subject = "Action needed: Confirm your arrival time"
    return subject, _page(GUEST_STYLE, body)
