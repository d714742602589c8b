from matplotlib import colormaps

from fractal_painting.datatypes import Palette

BACKGROUND_POSITION = 0.0
PRIMARY_POSITION = 0.85


def rgba_to_rgb(color):
    return tuple(int(c * 255) for c in color[:3])


def palette_from_colormap(colormap_name):
    """Build a palette from the two ends of a matplotlib colormap."""
    colormap = colormaps[colormap_name]
    return Palette(
        background_color=rgba_to_rgb(colormap(BACKGROUND_POSITION)),
        primary_color=rgba_to_rgb(colormap(PRIMARY_POSITION)),
    )


def available_colormaps():
    return sorted(colormaps.keys())


def get_stylesheet(palette):
    r_bg, g_bg, b_bg = palette.background_color
    r_text, g_text, b_text = palette.primary_color
    return """
     * {{
        color: rgb({r_text}, {g_text}, {b_text});
        background-color: rgb({r_bg}, {g_bg}, {b_bg});
    }}
    QGraphicsView {{
        border: none;
    }}
    QMenuBar::item:selected, QMenu::item:selected, QPushButton:hover {{
        background-color: rgb({r_text}, {g_text}, {b_text});
        color: rgb({r_bg}, {g_bg}, {b_bg});
    }}
    QLineEdit, QComboBox {{
        border: 1px solid rgb({r_text}, {g_text}, {b_text});
    }}
    QLabel {{
        border: none;
    }}
    """.format(
        r_bg=r_bg, g_bg=g_bg, b_bg=b_bg,
        r_text=r_text, g_text=g_text, b_text=b_text,
    )
