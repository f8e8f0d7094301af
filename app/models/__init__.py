# TripTogether Rentals — Database Models
# Import all models here for SQLAlchemy discovery

from app.models.amenity import VehicleAmenity, AmenityCategory   # noqa
from app.models.vehicle import Vehicle, VehicleType               # noqa
from app.models.payment import Payment, PaymentStatus             # noqa
