"""
Script para criar as tabelas e cadastrar lógicas de ID de exemplo.

Uso:
    python scripts/seed_id_logics.py
    python scripts/seed_id_logics.py --generate employee --data PREFIX=EMP
"""
import sys
import os
import argparse

# Adicionar o diretório raiz ao path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from idlogic.database import engine, SessionLocal
from idlogic.models import Base, IdLogic, ResetType
from idlogic.services.id_logic_service import generate

LOGICAS_EXEMPLO = [
    {
        "slug": "employee",
        "format": "{PREFIX}-{YYYY}-{MM}-{#####}",
        "reset_type": ResetType.MONTHLY,
        "pad_length": 5,
    },
    {
        "slug": "invoice",
        "format": "INV-{BRANCH}-{YY}-{######}",
        "reset_type": ResetType.YEARLY,
        "token_reset_logic": "YYYY",
        "pad_length": 6,
    },
    {
        "slug": "customer-order",
        "format": "{CUSTOMER}-{####}",
        "reset_type": ResetType.TOKEN,
        "pad_length": 4,
    },
    {
        "slug": "ticket",
        "format": "TK{YYYY}{MM}{DD}-{###}",
        "reset_type": ResetType.DAILY,
        "pad_length": 3,
    },
]


def create_tables():
    """Criar todas as tabelas no banco"""
    print("[*] Criando tabelas...")
    Base.metadata.create_all(bind=engine)
    print("[+] Tabelas criadas com sucesso!")


def seed_logics():
    """Cadastrar lógicas de exemplo (ignora slugs já existentes)"""
    db = SessionLocal()
    try:
        for dados in LOGICAS_EXEMPLO:
            existing = db.query(IdLogic).filter(IdLogic.slug == dados["slug"]).first()
            if existing:
                print(f"[!] Lógica '{dados['slug']}' já existe")
                continue
            db.add(IdLogic(**dados))
            print(f"[+] Lógica '{dados['slug']}' criada: {dados['format']}")
        db.commit()
    finally:
        db.close()


def parse_data(pairs):
    data = {}
    for pair in pairs or []:
        key, _, value = pair.partition("=")
        data[key] = value
    return data


def main():
    parser = argparse.ArgumentParser(description="Cadastrar lógicas de ID de exemplo")
    parser.add_argument("--generate", metavar="SLUG", help="Gerar um ID após o cadastro")
    parser.add_argument("--data", nargs="*", metavar="CHAVE=VALOR", help="Campos para o formato")
    parser.add_argument("--date", help="Data ISO-8601 da geração")
    parser.add_argument("--multiple", type=int, help="Quantidade de IDs")
    args = parser.parse_args()

    create_tables()
    seed_logics()

    if args.generate:
        db = SessionLocal()
        try:
            result = generate(db, args.generate, parse_data(args.data), args.date, args.multiple)
            print(f"[+] Gerado: {result}")
        finally:
            db.close()


if __name__ == "__main__":
    main()
