# scripts/setup/seed_amenities.py
"""
Seed the default vehicle amenity catalogue.
Safe to re-run: amenities that already exist are skipped.
Usage: python scripts/setup/seed_amenities.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from app.database import SessionLocal, create_tables
from app.exceptions import AmenityConflictError
from app.models.amenity import AmenityCategory
from app.schemas.amenity import AmenityCreate
from app.services.amenity_service import create_amenity

C = AmenityCategory

DEFAULT_AMENITIES = [
    # Climate control
    ("Air Conditioning", C.CLIMATE_CONTROL, 10.0, "Climate controlled environment with cooling"),
    ("Heating", C.CLIMATE_CONTROL, 8.0, "Heating system for winter comfort"),
    # Connectivity
    ("WiFi", C.CONNECTIVITY, 20.0, "High-speed internet access"),
    ("USB Charging Ports", C.CONNECTIVITY, 5.0, "USB ports for device charging"),
    ("Power Outlets", C.CONNECTIVITY, 8.0, "220V power outlets"),
    ("Mobile Holder", C.CONNECTIVITY, 2.0, "Secure mobile phone holder"),
    # Entertainment
    ("Audio System", C.ENTERTAINMENT, 12.0, "Premium sound system"),
    ("TV Screens", C.ENTERTAINMENT, 25.0, "Individual TV screens"),
    ("Streaming Service", C.ENTERTAINMENT, 15.0, "Access to streaming platforms"),
    ("Digital Console", C.ENTERTAINMENT, 10.0, "Digital instrument cluster with trip computer"),
    # Comfort
    ("Reclining Seats", C.COMFORT, 18.0, "Adjustable reclining seats"),
    ("Extra Legroom", C.COMFORT, 22.0, "Additional legroom space"),
    ("Restroom", C.COMFORT, 35.0, "Onboard restroom facilities"),
    ("Electric Start", C.COMFORT, 5.0, "Electric start system for easy ignition"),
    ("Alloy Wheels", C.COMFORT, 12.0, "Lightweight alloy wheels for better performance"),
    # Luxury
    ("Premium Seating", C.LUXURY, 30.0, "Luxury seating with premium materials"),
    # Storage
    ("Luggage Compartment", C.STORAGE, 10.0, "Secure luggage storage"),
    ("Overhead Bins", C.STORAGE, 8.0, "Overhead storage compartments"),
    ("Under Seat Storage", C.STORAGE, 3.0, "Storage compartment under seat"),
    # Accessibility
    ("Wheelchair Access", C.ACCESSIBILITY, 0.0, "Wheelchair accessible entry and seating"),
    ("Priority Seating", C.ACCESSIBILITY, 0.0, "Reserved seating for elderly and disabled"),
    # Safety
    ("GPS Tracking", C.SAFETY, 5.0, "Real-time GPS tracking"),
    ("Emergency Kit", C.SAFETY, 3.0, "First aid and emergency equipment"),
    ("Helmet Included", C.SAFETY, 0.0, "Safety helmet provided with rental"),
    ("LED Headlight", C.SAFETY, 8.0, "Bright LED headlight for better visibility"),
    ("ABS Brakes", C.SAFETY, 15.0, "Anti-lock braking system for safer stops"),
    ("Disc Brakes", C.SAFETY, 8.0, "Disc brake system for better stopping power"),
]


def main():
    print("🌱 Seeding vehicle amenities")
    print("=" * 40)
    create_tables()

    created = skipped = 0
    db = SessionLocal()
    try:
        for name, category, price, description in DEFAULT_AMENITIES:
            command = AmenityCreate(name=name, category=category, price_modifier=price, description=description)
            try:
                create_amenity(db, command)
                created += 1
                print(f"   ✓ {name}")
            except AmenityConflictError:
                skipped += 1
                print(f"   · {name} (already exists)")
    finally:
        db.close()

    print(f"\n✅ {created} created, {skipped} skipped")


if __name__ == "__main__":
    main()
