from sqlalchemy.orm import Session

from robostore.core.db import Base, engine, SessionLocal
from robostore.services.product_repository import ProductRepository


def reset_db(db: Session):
    # Drops & recreates all tables (local development only)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


DEMO_PRODUCTS = [
    # --------------------
    # DRONES
    # --------------------
    {
        "name": "Falcon X4 Racing Drone",
        "description": "5-inch FPV racing quad with carbon frame, 4-in-1 ESC and HD video link.",
        "price": 349.99,
        "category": "Drones",
        "features": ["Carbon fiber frame", "HD digital video", "Betaflight preconfigured"],
        "stock": 12,
        "specifications": {
            "weight": "420g",
            "dimensions": "220 x 220 x 45 mm",
            "power": "6S LiPo",
            "compatibility": ["DJI FPV Goggles", "ELRS receivers"],
        },
    },
    {
        "name": "SkyMapper Survey Drone",
        "description": "Long-endurance mapping drone with RTK GPS and mission planner support.",
        "price": 1899.00,
        "category": "Drones",
        "features": ["RTK GPS", "45 min flight time", "Waypoint missions"],
        "stock": 3,
        "specifications": {"weight": "2.1kg", "power": "4S Li-ion", "compatibility": ["ArduPilot", "PX4"]},
    },

    # --------------------
    # ROBOTIC ARMS
    # --------------------
    {
        "name": "UArm Desk 6-Axis",
        "description": "Six-axis desktop robotic arm with gripper, suction cup and Python SDK.",
        "price": 799.00,
        "category": "Robotic Arms",
        "features": ["0.2 mm repeatability", "Python SDK", "Interchangeable end effectors"],
        "stock": 5,
        "specifications": {"weight": "3.4kg", "dimensions": "Reach 480 mm", "power": "24V DC"},
    },

    # --------------------
    # SENSORS
    # --------------------
    {
        "name": "LiDAR Lite 360",
        "description": "360 degree 2D laser scanner for SLAM and obstacle avoidance.",
        "price": 129.50,
        "category": "Sensors",
        "features": ["12 m range", "8000 samples/s"],
        "stock": 40,
        "specifications": {"power": "5V USB", "compatibility": ["ROS 2", "Raspberry Pi", "Jetson Nano"]},
    },
    {
        "name": "IMU 9-DoF Breakout",
        "description": "Accelerometer, gyroscope and magnetometer on one I2C/SPI board.",
        "price": 24.90,
        "category": "Sensors",
        "features": ["I2C and SPI", "On-chip sensor fusion"],
        "stock": 150,
        "specifications": {"power": "3.3V", "compatibility": ["Arduino", "ESP32"]},
    },

    # --------------------
    # KITS / OTHER
    # --------------------
    {
        "name": "RoverBot Starter Kit",
        "description": "Four-wheel rover kit with motor driver, ultrasonic sensor and lesson plans.",
        "price": 89.00,
        "category": "Kits",
        "features": ["No soldering", "12 guided lessons"],
        "stock": 60,
    },
    {
        "name": "Servo Tester & Power Board",
        "description": "Bench tool for centering and sweeping hobby servos.",
        "price": 14.00,
        "category": "Other",
        "stock": 0,
    },
]


def seed_products(db: Session):
    repository = ProductRepository(db)
    for record in DEMO_PRODUCTS:
        repository.create(record)


def main():
    db = SessionLocal()
    try:
        reset_db(db)
        seed_products(db)

        print(f"✅ Seed complete: {len(DEMO_PRODUCTS)} products.")
        print("Try:")
        print("- GET /api/products")
        print("- GET /api/products/<id>")
    finally:
        db.close()


if __name__ == "__main__":
    main()
