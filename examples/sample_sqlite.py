from dotenv import load_dotenv
import os
import sqlite3
from sqlcompose import Finalizer, compile_template, join, map_nodes, raw, switch, values

def main():
    # Load environment variables from .env file
    load_dotenv()

    # Define database path
    db_path = os.getenv("SQLITE_DB_PATH", ":memory:")

    connection = sqlite3.connect(db_path)
    finalizer = Finalizer("?")

    print("Creating table 'sample_users'...")

    # Create table statement
    create_stmt = compile_template(
        "CREATE TABLE IF NOT EXISTS sample_users (\n\t?\n)",
        join(
            ",\n\t",
            switch({
                "sqlite": raw("id INTEGER PRIMARY KEY AUTOINCREMENT"),
                "postgres": raw("id SERIAL PRIMARY KEY"),
            }),
            raw("name TEXT NOT NULL"),
            raw("age INTEGER"),
        ),
    )
    compiled = finalizer.finalize("sqlite", create_stmt)
    connection.execute(compiled.sql, compiled.params)
    print("Table created successfully!")

    print("Inserting sample data...")

    users_data = [
        ("Alice", 30),
        ("Bob", 25),
        ("Charlie", 35)
    ]

    # Insert all users in a single multi-row statement
    insert_stmt = compile_template(
        "INSERT INTO sample_users (name, age) VALUES ?",
        join(", ", *map_nodes(users_data, lambda user: values(*user))),
    )
    compiled = finalizer.finalize("sqlite", insert_stmt)
    connection.execute(compiled.sql, compiled.params)
    connection.commit()
    print(f"Inserted {len(users_data)} users successfully!")

    print("Selecting users older than 26...")

    select_stmt = compile_template(
        "SELECT name, age FROM sample_users WHERE ? ORDER BY age",
        raw("age > ?", 26),
    )
    compiled = finalizer.finalize("sqlite", select_stmt)
    print(f"SQL: {compiled.sql} params={compiled.params}")
    for row in connection.execute(compiled.sql, compiled.params).fetchall():
        print(row)

    connection.close()

if __name__ == "__main__":
    main()
