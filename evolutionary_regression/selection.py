# selection.py
import numpy as np
from typing import Sequence
from .population import Individual


def tournament_selection(population: Sequence[Individual], fitness_scores: np.ndarray,
                         tournament_size: int, rng: np.random.Generator) -> Individual:
  """Tournament selection: sample ``tournament_size`` entrants with replacement
  and return the one with the lowest fitness (first sampled wins ties)."""
  return population[tournament_index(fitness_scores, tournament_size, rng)]


def tournament_index(fitness_scores: np.ndarray, tournament_size: int,
                     rng: np.random.Generator) -> int:
  tournament_indices = rng.integers(0, len(fitness_scores), size=tournament_size)
  tournament_fitness = fitness_scores[tournament_indices]
  return int(tournament_indices[np.argmin(tournament_fitness)])
