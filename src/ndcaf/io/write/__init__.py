"""Writers which store the filled analysis records."""

from .csv import *
