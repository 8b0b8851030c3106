from idlogic.database import SessionLocal


def get_db():
    """
    Dependency para obter sessão do banco de dados
    Cada requisição usa a própria sessão; a geração faz commit nela
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
