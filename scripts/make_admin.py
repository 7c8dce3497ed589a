"""Create an admin account, or promote an existing one.

Usage: python scripts/make_admin.py EMAIL [PASSWORD]
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from roadmap import create_app
from roadmap.extensions import db
from roadmap.models import AdminUser


def main(argv):
    if not argv:
        print(__doc__)
        return 2
    email = argv[0]
    password = argv[1] if len(argv) > 1 else None

    app = create_app()
    with app.app_context():
        existed = AdminUser.query.filter_by(email=email.strip().lower()).first() is not None
        try:
            AdminUser.create_or_promote(email, password)
        except ValueError as e:
            print(f'Error: {e}')
            return 1
        db.session.commit()
        print('Existing user promoted to admin' if existed else 'New admin user created')
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv[1:]))
