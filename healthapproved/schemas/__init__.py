from .product import Nutrition, Product
from .additive import AdditiveLevel, AdditiveRecord
from . import submission
