"""
H-R diagram of evolution tracks for a handful of stellar masses.

Draws the zero-age main sequence (0.1-100 M_sun) as a line and, for
each selected mass, the stage-by-stage path through the diagram from
main sequence to the last luminous stage. Remnants with zero
luminosity (black holes) cannot be placed on log axes and are skipped.

Run from repo root with PYTHONPATH=. (e.g. python scripts/plot_evolution_tracks.py).
No unicode (Windows charmap).
"""

import sys

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from physics.evolution import compute_stellar_properties, evolution_track

MASSES = [0.3, 1.0, 5.0, 15.0, 40.0]
COLORS = ['firebrick', 'goldenrod', 'seagreen', 'royalblue', 'purple']


def main(out_path='scripts/evolution_tracks.png'):
    zams = evolution_track(0.1, 100.0, 200)
    t_zams = np.asarray(zams['temperature'])
    l_zams = np.asarray(zams['luminosity'])

    fig, ax = plt.subplots(figsize=(8, 7))
    ax.plot(t_zams, l_zams, '-', color='gray', linewidth=2, alpha=0.6,
            label='Main sequence (0.1-100 M_sun)')

    for mass, color in zip(MASSES, COLORS):
        star = compute_stellar_properties(mass)
        # The supernova flash (T ~ 1e9 K) would compress the axes
        stages = [s for s in star.stages
                  if s.luminosity > 0 and s.temperature > 0
                  and s.name != 'Supernova']
        temps = [s.temperature for s in stages]
        lums = [s.luminosity for s in stages]
        ax.plot(temps, lums, 'o--', color=color, linewidth=1.2, markersize=6,
                label='%.1f M_sun (%s)' % (mass, star.evolution_path.final_state))
        for s in stages:
            ax.annotate(s.name, (s.temperature, s.luminosity), fontsize=6,
                        xytext=(4, 4), textcoords='offset points', color=color)

    ax.set_xscale('log')
    ax.set_yscale('log')
    ax.invert_xaxis()
    ax.set_xlabel('Effective temperature [K]')
    ax.set_ylabel('Luminosity [L_sun]')
    ax.set_title('Stellar evolution tracks')
    ax.legend(loc='lower left', fontsize=8)
    ax.grid(True, which='both', alpha=0.2)

    plt.tight_layout()
    plt.savefig(out_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print('Saved: %s' % out_path)
    return out_path


if __name__ == '__main__':
    main(*sys.argv[1:2])
