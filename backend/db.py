import os
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from dotenv import load_dotenv

load_dotenv()

DB_PATH = os.getenv("DB_PATH", "./data/jobs.db")
DATABASE_URL = f"sqlite:///{DB_PATH}"

#create the SQLAlchemy engine, one per process
#check_same_thread is off because FastAPI runs sync routes in a threadpool
engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})

#create a configured " Session" class will be used to interact with database
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

#Base class for our models
Base = declarative_base()


def init_db(bind=None):
    """Create the data directory and the tables if they don't exist yet."""
    bind = bind or engine
    db_file = bind.url.database
    if db_file and db_file != ":memory:":
        parent = os.path.dirname(db_file)
        if parent:
            os.makedirs(parent, exist_ok=True)
    import models.jobs  # noqa: F401  registers JobApplication with Base
    Base.metadata.create_all(bind=bind)


#dependency to get db session
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
