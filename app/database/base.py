from app.database.session import Base

# Import all models here so that Base has them registered
# The following imports are for SQLAlchemy to create the tables
from app.models.producer import Producer
from app.models.category import Category
from app.models.product import Product
