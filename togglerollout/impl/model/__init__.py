from togglerollout.impl.model.entity import *
from togglerollout.impl.model.toggle import *
