from rrg_config import QUADRANT_COLORS
from rrg_models import Quadrant


def color_quadrant(val):
    try:
        color = QUADRANT_COLORS[Quadrant(val)]
    except ValueError:
        return ''
    return f'color: {color}; font-weight: bold'


def style_rotation_table(styler):
    return (styler
            .set_table_styles([{'selector': 'th', 'props': [('text-align', 'center'), ('background-color', '#111'), ('color', '#94a3b8'), ('font-size', '12px')]},
                               {'selector': 'td', 'props': [('text-align', 'center'), ('font-size', '14px'), ('padding', '8px')]}])
            .set_properties(**{'background-color': '#0f172a', 'color': 'white', 'border-color': '#1e293b'})
            .set_properties(subset=['Symbol'], **{'font-weight': 'bold', 'font-family': 'monospace'})
            .set_properties(subset=['Distance'], **{'color': '#818cf8', 'font-weight': 'bold'})
            .map(color_quadrant, subset=['Quadrant'])
            .format({'RS-Ratio': "{:.2f}", 'RS-Momentum': "{:.2f}", 'Distance': "{:.2f}"})
            .hide(axis='index'))
