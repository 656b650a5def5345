from provenance import create_app
from provenance.utils.logger import setup_logger

app = create_app()
logger = setup_logger()

if __name__ == '__main__':
    logger.info("Starting provenance backend")
    app.run(host='0.0.0.0', port=app.config['PORT'], debug=app.config['DEBUG'])
