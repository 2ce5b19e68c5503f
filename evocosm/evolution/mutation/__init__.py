from evocosm.evolution.mutation.real import GeneWeights, Precision, RealGeneOps

__all__ = ["GeneWeights", "Precision", "RealGeneOps"]
