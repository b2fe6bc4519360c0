"""
Configuration for the virtual tag emulator
"""

import os

class Config:
    """Base configuration"""
    
    # Flask Configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'tagemu_secret_key'
    DEBUG = os.environ.get('DEBUG', 'True').lower() == 'true'
    
    # Server Configuration
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', 3000))
    
    # LLRP Transport Configuration
    LLRP_HOST = os.environ.get('LLRP_HOST', '127.0.0.1')
    LLRP_PORT = int(os.environ.get('LLRP_PORT', 5084))
    
    # Serial Configuration
    DEFAULT_PORT = os.environ.get('DEFAULT_SERIAL_PORT', 'COM1')
    DEFAULT_BAUDRATE = int(os.environ.get('DEFAULT_BAUDRATE', 57600))
    
    # Report Configuration
    PDU_BUDGET = int(os.environ.get('PDU_BUDGET', 1500))
    FRAMING_OVERHEAD = int(os.environ.get('FRAMING_OVERHEAD', 100))  # IP frame and ROAR headers
    ENCODE_WORKERS = int(os.environ.get('ENCODE_WORKERS', 1))
    ON_ENCODE_ERROR = os.environ.get('ON_ENCODE_ERROR', 'skip')
    OVERSIZED_POLICY = os.environ.get('OVERSIZED_POLICY', 'send')
    
    # Tag Storage
    TAG_FILE = os.environ.get('TAG_FILE', 'tags.csv')
    
    # WebSocket Configuration
    SOCKETIO_ASYNC_MODE = 'threading'
    SOCKETIO_CORS_ALLOWED_ORIGINS = "*"
    
    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

class DevelopmentConfig(Config):
    """Development environment"""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'

class ProductionConfig(Config):
    """Production environment"""
    DEBUG = False
    LOG_LEVEL = 'WARNING'
    
    HOST = os.environ.get('HOST', '127.0.0.1')
    PORT = int(os.environ.get('PORT', 5000))

class TestingConfig(Config):
    """Testing environment"""
    TESTING = True
    DEBUG = True
    LOG_LEVEL = 'DEBUG'
    PDU_BUDGET = 150

# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}

def get_config():
    """Return the configuration class selected by TAGEMU_ENV"""
    config_name = os.environ.get('TAGEMU_ENV', 'default')
    return config.get(config_name, config['default'])
