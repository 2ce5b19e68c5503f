from evocosm.organisms.organism import Organism, Population

__all__ = ["Organism", "Population"]
