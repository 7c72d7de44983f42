from typing import Dict

from PIL import Image, ImageDraw, ImageEnhance

ICON_SIZE = 40
_SUPERSAMPLE = 4

INK = (33, 37, 41, 255)
ACCENT = (255, 193, 7, 255)
BLUE = (0, 123, 255, 255)


def _play(draw, s):
    draw.polygon([(s * 0.3, s * 0.2), (s * 0.3, s * 0.8), (s * 0.8, s * 0.5)], fill=BLUE)


def _step(draw, s):
    draw.polygon([(s * 0.2, s * 0.2), (s * 0.2, s * 0.8), (s * 0.62, s * 0.5)], fill=BLUE)
    draw.rectangle([s * 0.66, s * 0.2, s * 0.8, s * 0.8], fill=BLUE)


def _pause(draw, s):
    draw.rectangle([s * 0.25, s * 0.2, s * 0.42, s * 0.8], fill=INK)
    draw.rectangle([s * 0.58, s * 0.2, s * 0.75, s * 0.8], fill=INK)


def _reset(draw, s):
    w = max(1, int(s * 0.09))
    draw.arc([s * 0.2, s * 0.2, s * 0.8, s * 0.8], start=40, end=330, fill=INK, width=w)
    draw.polygon([(s * 0.62, s * 0.12), (s * 0.86, s * 0.3), (s * 0.6, s * 0.38)], fill=INK)


def _logo(draw, s):
    """Um estado final: dois círculos concêntricos."""
    w = max(1, int(s * 0.05))
    draw.ellipse([s * 0.06, s * 0.06, s * 0.94, s * 0.94], fill=ACCENT, outline=INK, width=w)
    draw.ellipse([s * 0.2, s * 0.2, s * 0.8, s * 0.8], outline=INK, width=w)


_DRAWERS = {
    "executar": _play,
    "passo": _step,
    "pausar": _pause,
    "reiniciar": _reset,
    "logo": _logo,
}


def draw_icon(name: str, size: int = ICON_SIZE) -> Image.Image:
    """Desenha o ícone pedido em RGBA. Nome desconhecido gera KeyError."""
    drawer = _DRAWERS[name]
    big = size * _SUPERSAMPLE
    img = Image.new("RGBA", (big, big), (0, 0, 0, 0))
    drawer(ImageDraw.Draw(img), big)

    alpha = img.getchannel("A")
    rgb = ImageEnhance.Color(img.convert("RGB")).enhance(1.5)
    rgb = ImageEnhance.Contrast(rgb).enhance(1.1)
    rgb.putalpha(alpha)
    return rgb.resize((size, size), Image.Resampling.LANCZOS)


def load_icons(size: int = ICON_SIZE) -> Dict[str, "ImageTk.PhotoImage"]:
    """Converte todos os ícones para PhotoImage. Exige uma janela Tk já criada."""
    from PIL import ImageTk
    return {name: ImageTk.PhotoImage(draw_icon(name, size)) for name in _DRAWERS}
