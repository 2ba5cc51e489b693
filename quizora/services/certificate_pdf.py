"""
Render a certificate to a one-page A4 landscape PDF with Pillow.
Layout: double border, title, holder name, quiz title, category, score, issue date, certificate code, footer.
"""
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

# A4 landscape at 150 dpi
DPI = 150
PAGE_WIDTH, PAGE_HEIGHT = 1754, 1240

PRIMARY = (41, 128, 185)
SECONDARY = (52, 73, 94)
GOLD = (241, 196, 15)

_FONT_DIR = "/usr/share/fonts/truetype/dejavu"
PLATFORM_NAME = "Quizora Platform"


@dataclass
class CertificateData:
    user_name: str
    quiz_title: str
    category_name: str
    score: float
    issue_date: datetime | None
    certificate_code: str


def _font(filename: str, size: int):
    try:
        return ImageFont.truetype(f"{_FONT_DIR}/{filename}", size)
    except OSError:
        return ImageFont.load_default(size=size)


def format_score(score: float) -> str:
    return f"{round(score, 2):g}%"


def build_certificate_pdf(data: CertificateData) -> BytesIO:
    """Return a BytesIO containing the PDF (rewound to 0)."""
    img = Image.new("RGB", (PAGE_WIDTH, PAGE_HEIGHT), color="white")
    draw = ImageDraw.Draw(img)
    draw.rectangle([40, 40, PAGE_WIDTH - 40, PAGE_HEIGHT - 40], outline=PRIMARY, width=8)
    draw.rectangle([60, 60, PAGE_WIDTH - 60, PAGE_HEIGHT - 60], outline=GOLD, width=3)

    title_font = _font("DejaVuSerif-Bold.ttf", 72)
    name_font = _font("DejaVuSerif-Bold.ttf", 60)
    subtitle_font = _font("DejaVuSerif.ttf", 40)
    text_font = _font("DejaVuSans.ttf", 32)
    small_font = _font("DejaVuSans.ttf", 26)

    def centered(text: str, font, y: int, fill) -> None:
        bbox = draw.textbbox((0, 0), text, font=font)
        draw.text(((PAGE_WIDTH - (bbox[2] - bbox[0])) / 2, y), text, fill=fill, font=font)

    issued = data.issue_date.strftime("%B %d, %Y") if data.issue_date else "-"
    centered("Certificate of Completion", title_font, 140, PRIMARY)
    centered("This is to certify that", subtitle_font, 300, SECONDARY)
    centered(data.user_name, name_font, 380, GOLD)
    centered("has successfully passed the quiz", subtitle_font, 500, SECONDARY)
    centered(data.quiz_title, name_font, 580, PRIMARY)
    centered(f"Category: {data.category_name}", text_font, 720, SECONDARY)
    centered(f"Score: {format_score(data.score)}", text_font, 780, SECONDARY)
    centered(f"Issued on: {issued}", small_font, 880, SECONDARY)
    centered(f"Certificate ID: {data.certificate_code}", small_font, 930, SECONDARY)
    draw.line([(PAGE_WIDTH // 2 - 200, 1040), (PAGE_WIDTH // 2 + 200, 1040)], fill=SECONDARY, width=2)
    centered(PLATFORM_NAME, small_font, 1055, SECONDARY)

    buf = BytesIO()
    img.save(buf, format="PDF", resolution=float(DPI), title=f"Certificate {data.certificate_code}")
    buf.seek(0)
    return buf
