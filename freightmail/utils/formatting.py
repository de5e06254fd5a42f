"""HTML email bodies for website submissions."""

from markupsafe import Markup, escape


def text_to_html(value):
    """Escape free text and turn its line breaks into ``<br>``."""
    lines = escape(value or '').replace('\r\n', '\n').split('\n')
    return Markup('<br>').join(lines)


def render_notification(title, fields, message):
    """Render a heading, labelled fields and a trailing message block."""
    parts = [Markup('<h2>{}</h2>').format(title)]
    for label, value in fields:
        parts.append(Markup('<p><strong>{}:</strong> {}</p>').format(label, value))
    parts.append(Markup('<p><strong>Message:</strong></p>'))
    parts.append(Markup('<p>{}</p>').format(text_to_html(message)))
    return str(Markup('\n').join(parts))


def contact_html(submission):
    return render_notification('New Contact Form Submission', [
        ('Name', submission.name),
        ('Email', submission.email),
    ], submission.message)


def quotation_html(request):
    return render_notification('New Quotation Request', [
        ('Name', request.name),
        ('Company', request.company),
        ('Email', request.email),
        ('Phone', request.phone),
        ('Origin Zip Code', request.origin_zip),
        ('Destination Zip Code', request.destination_zip),
        ('Product', request.product),
        ('Truck Type', request.truck_type),
    ], request.message)
