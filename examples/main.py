from sqlcompose import compile_template, finalize, join, raw, switch, values

PLACEHOLDERS = {
    "postgres": "$%d",
    "sqlite": "?",
    "sqlserver": "@p%d",
    "oracle": ":%d",
}

def main():
    """
    Example usage of the expression builder: one tree, four dialects.
    """
    query = join(
        " ",
        switch({"sqlserver": raw("SELECT TOP 10 *")}),
        switch({
            "postgres": raw("SELECT *"),
            "sqlite": raw("SELECT *"),
            "oracle": raw("SELECT *"),
        }),
        raw("FROM users"),
        compile_template("WHERE id IN ?", values(1, 2, 3)),
        switch({
            "postgres": raw("LIMIT 10"),
            "sqlite": raw("LIMIT 10"),
            "oracle": raw("FETCH FIRST 10 ROWS ONLY"),
        }),
    )

    for dialect, placeholder in PLACEHOLDERS.items():
        compiled = finalize(placeholder, dialect, query)
        print(f"{dialect:>9}: {compiled.sql} {compiled.params}")

if __name__ == "__main__":
    main()
