import mysql.connector
from config import Config

def split_statements(sql):
    return [statement.strip() for statement in sql.split(';') if statement.strip()]

def init_db(schema_path='schema.sql'):
    conn = mysql.connector.connect(
        host=Config.MYSQL_HOST,
        port=Config.MYSQL_PORT,
        user=Config.MYSQL_USER,
        password=Config.MYSQL_PASSWORD,
        database=Config.MYSQL_DATABASE
    )
    try:
        with conn.cursor() as cur:
            with open(schema_path, 'r') as f:
                # MySQL requires single statements
                for statement in split_statements(f.read()):
                    cur.execute(statement)
            conn.commit()
    finally:
        conn.close()

if __name__ == "__main__":
    init_db()
