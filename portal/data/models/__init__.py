#import modeli zeby SQLAlchemy zarejestrowal je w Base.metadata

from portal.data.models.cart_slot import CartSlotModel

__all__ = ["CartSlotModel"]
