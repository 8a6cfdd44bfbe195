import os

from config import DevelopmentConfig, ProductionConfig
from energywise import create_app

config_class = ProductionConfig if os.environ.get("FLASK_ENV") == "production" else DevelopmentConfig
app = create_app(config_class)

if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
