import sys

from qrmatrix.symbol import QRSymbol


def to_text(qr: QRSymbol, quiet_zone: int = 2) -> str:
    n = qr.module_count()
    blank = "  " * (n + 2 * quiet_zone)
    lines = [blank] * quiet_zone
    for r in range(n):
        row = "".join("██" if qr.is_dark(r, c) else "  " for c in range(n))
        lines.append("  " * quiet_zone + row + "  " * quiet_zone)
    lines += [blank] * quiet_zone
    return "\n".join(lines)


if __name__ == "__main__":
    text = sys.argv[1] if len(sys.argv) > 1 else "https://example.com"
    level = sys.argv[2] if len(sys.argv) > 2 else "M"

    qr = QRSymbol(ecc_level=level)
    qr.add_data(text)
    qr.build()

    print(to_text(qr))
    print(f"version={qr.version} level={qr.ecc_level.name} mask={qr.mask_pattern} modules={qr.module_count()}")
