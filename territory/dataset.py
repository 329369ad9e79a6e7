import numpy as np
import torch
from torch.utils.data import Dataset
from typing import Dict, List

from territory.engine import generate_dataset


def trajectory_features(traj: Dict) -> np.ndarray:
    """(T+1, n_balls, 5) → [x, y, vx, vy, own_ratio] per ball."""
    states = traj['states']
    territory = traj['territory'].astype(np.float64)
    ratios = territory / territory.sum(axis=1, keepdims=True)
    own = ratios[:, traj['colors']]
    return np.concatenate([states, own[:, :, None]], axis=2)


class TerritoryDataset(Dataset):
    def __init__(self, data: List[Dict], mode='state_residual'):
        self.mode = mode
        X_list = []
        Y_list = []

        for traj in data:
            feats = trajectory_features(traj)
            X = feats[:-1]

            if mode == 'state_next':
                Y = feats[1:]
            elif mode == 'state_residual':
                Y = feats[1:] - feats[:-1]
            else:
                raise ValueError(f"Unknown mode: {mode}")

            X_list.append(X.reshape(len(X), -1))
            Y_list.append(Y.reshape(len(Y), -1))

        self.X = np.concatenate(X_list, axis=0).astype(np.float32)
        self.Y = np.concatenate(Y_list, axis=0).astype(np.float32)

        self.x_mean = np.mean(self.X, axis=0)
        self.x_std = np.std(self.X, axis=0) + 1e-6

        self.y_mean = np.mean(self.Y, axis=0)
        self.y_std = np.std(self.Y, axis=0) + 1e-6

    def __len__(self):
        return self.X.shape[0]

    def __getitem__(self, idx):
        return torch.from_numpy(self.X[idx]), torch.from_numpy(self.Y[idx])

    def normalize(self, x: np.ndarray, is_target=False) -> np.ndarray:
        if is_target:
            return (x - self.y_mean) / self.y_std
        return (x - self.x_mean) / self.x_std

    def denormalize(self, x: np.ndarray, is_target=False) -> np.ndarray:
        if is_target:
            return x * self.y_std + self.y_mean
        return x * self.x_std + self.x_mean

    @staticmethod
    def from_config(n_trajectories=10, n_steps=200, mode='state_residual', **kwargs):
        raw_data = generate_dataset(n_trajectories=n_trajectories, n_steps=n_steps, **kwargs)
        return TerritoryDataset(raw_data, mode=mode)
