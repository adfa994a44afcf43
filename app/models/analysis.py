"""
Model para armazenar as análises geradas.
"""
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON

from app.database import Base


class StoredAnalysis(Base):
    """
    Representa o resultado da análise de um arquivo.

    O resultado completo fica serializado em JSON; o registro
    nunca é alterado depois de criado.
    """
    __tablename__ = "analyses"

    file_id = Column(String(64), primary_key=True, index=True)
    file_name = Column(String(255), nullable=False)

    payload = Column(JSON, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
