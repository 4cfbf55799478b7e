"""
Labels — TSPL programs for 203 dpi thermal label printers.

Isolated and testable: takes a product (or anything with name/sizes/brand/
barcode attributes or keys) and returns printer text. Sending the bytes to
a printer is the caller's business.

Layout of the 50x40 mm label:

    ┌──────────────────────────────┐
    │ ┌──────┐  NAME               │
    │ │  QR  │  SIZES              │
    │ │      │  BRAND              │
    │ └──────┘  BARCODE            │
    └──────────────────────────────┘
"""

# 203 dpi: 1 mm ≈ 8 dots
DOTS_PER_MM = 8


def mm(value: float) -> int:
    """Millimetres to printer dots."""
    return round(value * DOTS_PER_MM)


def escape_tspl(value) -> str:
    """TSPL strings are double-quoted; swap inner double quotes for single."""
    return str(value).replace('"', "'")


def _get(product, field: str) -> str:
    if isinstance(product, dict):
        value = product.get(field)
    else:
        value = getattr(product, field, None)
    return '' if value is None else str(value)


def label_fields(product) -> dict[str, str]:
    """
    Text printed on a label.

    The barcode falls back to the product key for records stored under an
    opaque id without a barcode field.
    """
    barcode = _get(product, 'barcode') or _get(product, 'key')
    return {
        'name': _get(product, 'name'),
        'sizes': _get(product, 'sizes'),
        'brand': _get(product, 'brand'),
        'barcode': barcode,
        'qr_data': barcode or _get(product, 'name') or ' ',
    }


def build_tspl_50x40(product, copies: int = 1) -> str:
    """
    TSPL program for one 50x40 mm label with a QR code and four text lines.

    Empty text lines are left out. Lines end with CRLF.
    """
    fields = label_fields(product)

    gap = mm(2)
    qr_x, qr_y = mm(3), mm(3)
    qr_cell = 6
    text_x = mm(28)
    line = mm(5)
    text_y = [mm(3) + line * i for i in range(4)]

    lines = [
        'SIZE 50 mm,40 mm',
        f'GAP {gap},0',
        'DIRECTION 1',
        'REFERENCE 0,0',
        'CLS',
        f'QRCODE {qr_x},{qr_y},L,{qr_cell},A,0,"{escape_tspl(fields["qr_data"])}"',
    ]
    for y, key in zip(text_y, ('name', 'sizes', 'brand', 'barcode')):
        if fields[key]:
            lines.append(f'TEXT {text_x},{y},"0",0,1,1,"{escape_tspl(fields[key])}"')
    lines.append(f'PRINT 1,{max(1, int(copies))}')

    return '\r\n'.join(lines) + '\r\n'
