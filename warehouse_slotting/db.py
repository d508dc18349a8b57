from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session
from contextlib import contextmanager

from warehouse_slotting.config import config
from warehouse_slotting.models import Base

class Database:
    """Database connection manager for the Warehouse Slotting System."""
    
    _instance = None
    
    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super(Database, cls).__new__(cls)
            cls._instance._initialized = False
        return cls._instance
    
    def __init__(self):
        """Initialize the database connection if not already initialized."""
        if self._initialized:
            return
        
        self._engine = None
        self._session_factory = None
        self._session = None
        self._initialized = True
    
    def initialize(self, connection_string=None, **engine_options):
        """Initialize database connection.
        
        Args:
            connection_string: Optional database URL.
                              If not provided, will use configuration.
            engine_options: Extra keyword arguments for create_engine
        """
        if connection_string is None:
            connection_string = config.get_db_url()
        
        echo = config.get_boolean('DATABASE', 'echo', False)
        
        self._engine = create_engine(connection_string, echo=echo, **engine_options)
        self._session_factory = sessionmaker(bind=self._engine)
        # One session per thread, so zones can be processed in parallel
        self._session = scoped_session(self._session_factory)
    
    def create_all_tables(self):
        """Create all tables defined in the models."""
        Base.metadata.create_all(self.engine)
    
    def drop_all_tables(self):
        """Drop all tables from the database."""
        Base.metadata.drop_all(self.engine)
    
    @property
    def session(self):
        """Get the thread-local session registry."""
        if self._session is None:
            self.initialize()
        return self._session
    
    @property
    def engine(self):
        """Get the database engine."""
        if self._engine is None:
            self.initialize()
        return self._engine
    
    @contextmanager
    def session_scope(self):
        """Provide a transactional scope around a series of operations."""
        session = self.session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            self.session.remove()

# Global database instance
db = Database()

@contextmanager
def session_scope():
    """Session scope context manager."""
    with db.session_scope() as session:
        yield session
