from models.batch import Batch
from models.mortality import MortalityRecord
from models.feed import FeedRecord
from models.weight_sample import WeightSample

__all__ = ['Batch', 'FeedRecord', 'MortalityRecord', 'WeightSample',]
