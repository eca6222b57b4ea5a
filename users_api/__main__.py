"""Run the users API: python -m users_api"""

from users_api.main import run

run()
