import logging

import matplotlib.pyplot as plt

from beam import Beam, BeamAnalysis, Condition, Material
from beam_config import CONFIG

logger = logging.getLogger(__name__)

QUANTITIES = ('deflection', 'bending_moment', 'shear_force')


# ---------- Plotting ----------
def plot_curve(curve, ax=None, config=CONFIG):
    if ax is None:
        _, ax = plt.subplots()
    ax.plot(curve.x, curve.y, color=config.line_color, lw=config.line_width, label=curve.quantity)
    ax.fill_between(curve.x, curve.y, 0, color=config.line_color, alpha=0.15)
    ax.axhline(0, color='black', lw=0.7)
    ax.set_xlabel(curve.x_label)
    ax.set_ylabel(curve.y_label)
    ax.legend(loc='upper center')
    ax.grid(True)
    return ax


def plot_results(results, show=True, config=CONFIG):
    """Stack the curves of a BeamAnalysis.analyze() dict on shared-x axes."""
    fig, axs = plt.subplots(len(QUANTITIES), 1, figsize=config.figsize, sharex=True)
    for ax, key in zip(axs, QUANTITIES):
        plot_curve(results[key].equation, ax=ax, config=config)
    first = results[QUANTITIES[0]]
    axs[0].set_title(f"{first.condition.value}, w = {first.load:g}")
    plt.tight_layout()
    if show:
        plt.show()
    return fig


def summarize(results):
    lines = []
    for key in QUANTITIES:
        curve = results[key].equation
        x, value = curve.peak()
        lines.append(f"Max |{curve.quantity}|: {abs(value):.3f} {curve.unit} at x = {x:.3f} m")
    return lines


# ---------------- Example ----------------
def main(show=True):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    analysis = BeamAnalysis()
    steel = Material('steel', {'EI': 210000.0})
    load = 10.0

    cases = [
        (Beam(primary_span=6.0, secondary_span=0.0, j2=1.0, material=steel), Condition.SIMPLY_SUPPORTED),
        (Beam(primary_span=4.0, secondary_span=6.0, j2=1.0, material=steel), Condition.TWO_SPAN_UNEQUAL),
    ]
    for beam, condition in cases:
        logger.info("Analysing %s beam, spans %g / %g m", condition.value, beam.primary_span, beam.secondary_span)
        res = analysis.analyze(beam, load, condition)
        print(f"\n--- {condition.value} ---")
        for line in summarize(res):
            print(line)
        plot_results(res, show=show)


if __name__ == '__main__':
    main()
