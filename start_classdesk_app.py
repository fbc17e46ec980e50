from dotenv import load_dotenv
import os

# Load environment variables from .env file
load_dotenv()

from classdesk_app import create_app

app = create_app()

if __name__ == '__main__':
    app.run(
        host=os.getenv('FLASK_RUN_HOST', '0.0.0.0'),
        port=int(os.getenv('FLASK_RUN_PORT', '5000')),
        debug=os.getenv('FLASK_DEBUG', '1') == '1',
    )
