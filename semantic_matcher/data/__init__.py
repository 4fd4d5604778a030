from .loaders import DataLoader, JSONDataLoader, LoaderType, SampleDataLoader, create_data_loader
from .sample_data import SAMPLE_DATA

__all__ = [
    'DataLoader',
    'JSONDataLoader',
    'LoaderType',
    'SAMPLE_DATA',
    'SampleDataLoader',
    'create_data_loader'
]
