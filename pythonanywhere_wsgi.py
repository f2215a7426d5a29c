import sys
import os

# Add the project directory to the sys.path
project_home = '/home/YOUR_USERNAME/margin-engine'
if project_home not in sys.path:
    sys.path.insert(0, project_home)

# Set the working directory
os.chdir(project_home)
os.environ.setdefault('APP_ENV', 'production')

# Import the Flask app built by create_app()
from app import app as application
