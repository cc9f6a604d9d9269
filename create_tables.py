# create_tables.py
import sys
from sqlalchemy import text
from app.config.settings import DashboardConfig
from app.database import Base, engine, SessionLocal
from app.models import User, UserRole

def create_tables(reset: bool = False):
    """Create all tables, optionally dropping existing ones first"""
    try:
        if reset:
            Base.metadata.drop_all(bind=engine)
            print("🗑️  Existing tables dropped")

        Base.metadata.create_all(bind=engine)
        print("✅ All tables created successfully!")

        create_default_admin()

    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        return False
    return True

def create_default_admin():
    """Create the default admin user if it does not exist yet"""
    admin = DashboardConfig.DEFAULT_ADMIN
    session = SessionLocal()
    try:
        admin_exists = session.execute(
            text("SELECT COUNT(*) FROM users WHERE username = :username"),
            {"username": admin["username"]}
        ).scalar()

        if admin_exists == 0:
            session.add(User(
                username=admin["username"],
                email=admin["email"],
                role=UserRole.ADMIN.value,
                is_active=True
            ))
            session.commit()
            print("✅ Default admin user created!")
            print(f"   Username: {admin['username']}")
        else:
            print("ℹ️  Admin user already exists")
    except Exception as e:
        session.rollback()
        print(f"❌ Error creating default admin: {e}")
        raise
    finally:
        session.close()

if __name__ == "__main__":
    create_tables(reset="--reset" in sys.argv)
