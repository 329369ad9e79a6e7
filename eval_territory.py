import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import os
import territory as T
from territory.engine import generate_dataset
from territory.grid import Color
from territory.metrics import (
    territory_share, territory_conserved, ball_speeds, capture_counts, lead_changes,
)


def evaluate(n_trajectories=T.N_TRAJECTORIES, n_steps=T.N_STEPS):
    print(f"Generating {n_trajectories} trajectories x {n_steps} ticks")
    data = generate_dataset(n_trajectories=n_trajectories, n_steps=n_steps, seed=T.SEED)

    shares = []
    for i, traj in enumerate(data):
        territory = traj['territory']
        if not territory_conserved(territory, traj['config'].total_cells):
            raise RuntimeError(f"territory not conserved for seed {traj['config'].seed}")
        share = territory_share(territory, Color.LIGHT)
        speeds = ball_speeds(traj['states'])
        captures = capture_counts(traj['captures'], n_balls=speeds.shape[1])
        shares.append(share)
        print(f"[{i:02d}] seed={traj['config'].seed} "
              f"light={share[-1]:.3f} "
              f"captures={captures.tolist()} "
              f"lead_changes={lead_changes(territory)} "
              f"speed(light) {speeds[:, 0].min():.2f}..{speeds[:, 0].max():.2f}")

    shares = np.array(shares)
    print(f"Final light share: mean={shares[:, -1].mean():.3f} "
          f"std={shares[:, -1].std():.3f}")

    os.makedirs('results/plots', exist_ok=True)
    plt.figure(figsize=(10, 5))
    for share in shares:
        plt.plot(share, color='gray', alpha=0.3)
    plt.plot(shares.mean(axis=0), color='black', label='Mean light share')
    plt.axhline(0.5, color='red', linestyle='--', alpha=0.5)
    plt.xlabel('Tick')
    plt.ylabel('Light territory share')
    plt.title('Territory share over time')
    plt.legend()
    plt.savefig('results/plots/territory_share.png')
    plt.close()
    print("Saved results/plots/territory_share.png")


if __name__ == "__main__":
    evaluate()
