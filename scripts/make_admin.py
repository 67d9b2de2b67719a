"""
Script to create an admin account, or promote an existing one
Usage: python scripts/make_admin.py <username> [password]
"""

import sys
import os

# Add project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Now import
from jambangan import create_app
from extensions import db
from jambangan.models.user import User, UserRole


def make_admin(username, password=None, app=None):
    """Make a user admin by username, creating the account when a password is given"""
    if app is None:
        app = create_app()

    with app.app_context():
        user = User.query.filter_by(username=username).first()

        if not user:
            if not password:
                print(f"❌ User '{username}' not found")
                print("   Pass a password to create the account")
                return False

            user = User(username=username, password=password, level=UserRole.ADMIN.value)
            db.session.add(user)
            db.session.commit()
            print(f"✅ Created admin '{username}'")
            return True

        if user.is_admin:
            print(f"✓ User '{username}' is already an admin")
            return True

        user.level = UserRole.ADMIN.value
        if password:
            user.set_password(password)
        db.session.commit()

        print(f"✅ Successfully made '{username}' an admin")
        print(f"   Level: {user.level}")
        return True


if __name__ == '__main__':
    if len(sys.argv) < 2:
        print("Usage: python scripts/make_admin.py <username> [password]")
        print("Example: python scripts/make_admin.py admin s3cret")
        sys.exit(1)

    ok = make_admin(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None)
    sys.exit(0 if ok else 1)
