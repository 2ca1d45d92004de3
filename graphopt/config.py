"""Configuration classes for graphopt components."""

from dataclasses import dataclass


@dataclass
class GeneticConfig:
    """Parameters of the genetic TSP heuristic."""

    # Number of individuals kept per generation
    population_size: int = 100

    # Number of generations to evolve
    generations: int = 100

    # Probability that a child receives one random swap
    mutation_rate: float = 0.1

    # Individuals sampled per tournament selection
    tournament_size: int = 5

    def validate(self) -> None:
        """Raise ValueError if any parameter is outside its usable range."""
        if self.population_size < 2:
            raise ValueError("population_size must be at least 2.")
        if self.generations < 0:
            raise ValueError("generations must be non-negative.")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must be within [0, 1].")
        if not 1 <= self.tournament_size <= self.population_size:
            raise ValueError("tournament_size must be within [1, population_size].")


# Global configuration instance
GENETIC_CONFIG = GeneticConfig()
