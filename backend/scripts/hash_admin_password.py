"""Print a bcrypt hash suitable for ADMIN_PASSWORD_HASH."""

import sys, pathlib, getpass
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from storefront.core.security import get_password_hash

password = getpass.getpass("Admin password: ")
if not password:
    sys.exit("password must not be empty")
print(get_password_hash(password))
