"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
CREATE EXTENSION IF NOT EXISTS pgcrypto;

CREATE SCHEMA IF NOT EXISTS wdiet;

-- Users table: account owners of fridges and recipes
CREATE TABLE IF NOT EXISTS wdiet.users (
    user_uuid       UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    hashed_password TEXT NOT NULL,
    active          BOOLEAN NOT NULL DEFAULT FALSE,
    first_name      VARCHAR(100) NOT NULL,
    last_name       VARCHAR(100) NOT NULL,
    email_address   VARCHAR(255) UNIQUE NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Ingredients table: shared catalogue with shelf life
CREATE TABLE IF NOT EXISTS wdiet.ingredients (
    ingredient_uuid UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    ingredient_name VARCHAR(100) NOT NULL,
    category        VARCHAR(50) NOT NULL,
    days_until_exp  INT NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Fridge ingredients: what a user currently has, keyed by (user, ingredient)
CREATE TABLE IF NOT EXISTS wdiet.fridge_ingredients (
    user_uuid       UUID NOT NULL REFERENCES wdiet.users(user_uuid) ON DELETE CASCADE,
    ingredient_uuid UUID NOT NULL REFERENCES wdiet.ingredients(ingredient_uuid) ON DELETE CASCADE,
    amount          INT NOT NULL,
    unit            VARCHAR(20) NOT NULL,
    purchased_date  DATE NOT NULL,
    expiration_date DATE NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    PRIMARY KEY (user_uuid, ingredient_uuid)
);

-- Recipes: aggregate root of recipe_ingredients and recipe_instructions
CREATE TABLE IF NOT EXISTS wdiet.recipes (
    recipe_uuid     UUID PRIMARY KEY DEFAULT gen_random_uuid(),
    user_uuid       UUID NOT NULL REFERENCES wdiet.users(user_uuid) ON DELETE CASCADE,
    recipe_name     VARCHAR(200) NOT NULL,
    category        VARCHAR(50) NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- Recipe ingredient lines; the same ingredient may appear twice
CREATE TABLE IF NOT EXISTS wdiet.recipe_ingredients (
    recipe_uuid     UUID NOT NULL REFERENCES wdiet.recipes(recipe_uuid),
    ingredient_uuid UUID NOT NULL REFERENCES wdiet.ingredients(ingredient_uuid),
    position        INT NOT NULL,
    amount          INT NOT NULL,
    unit            VARCHAR(20) NOT NULL
);

-- Recipe instruction steps
CREATE TABLE IF NOT EXISTS wdiet.recipe_instructions (
    recipe_uuid     UUID NOT NULL REFERENCES wdiet.recipes(recipe_uuid),
    position        INT NOT NULL,
    step_num        INT NOT NULL,
    instruction     TEXT NOT NULL
);

-- Server-side refresh of updated_at
CREATE OR REPLACE FUNCTION wdiet.touch_updated_at() RETURNS TRIGGER AS $$
BEGIN
    NEW.updated_at = NOW();
    RETURN NEW;
END;
$$ LANGUAGE plpgsql;

DROP TRIGGER IF EXISTS users_touch ON wdiet.users;
CREATE TRIGGER users_touch BEFORE UPDATE ON wdiet.users
    FOR EACH ROW EXECUTE FUNCTION wdiet.touch_updated_at();

DROP TRIGGER IF EXISTS ingredients_touch ON wdiet.ingredients;
CREATE TRIGGER ingredients_touch BEFORE UPDATE ON wdiet.ingredients
    FOR EACH ROW EXECUTE FUNCTION wdiet.touch_updated_at();

DROP TRIGGER IF EXISTS fridge_ingredients_touch ON wdiet.fridge_ingredients;
CREATE TRIGGER fridge_ingredients_touch BEFORE UPDATE ON wdiet.fridge_ingredients
    FOR EACH ROW EXECUTE FUNCTION wdiet.touch_updated_at();

DROP TRIGGER IF EXISTS recipes_touch ON wdiet.recipes;
CREATE TRIGGER recipes_touch BEFORE UPDATE ON wdiet.recipes
    FOR EACH ROW EXECUTE FUNCTION wdiet.touch_updated_at();

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_ingredients_name ON wdiet.ingredients(ingredient_name);
CREATE INDEX IF NOT EXISTS idx_recipes_user ON wdiet.recipes(user_uuid);
CREATE INDEX IF NOT EXISTS idx_recipe_ingredients_recipe ON wdiet.recipe_ingredients(recipe_uuid, position);
CREATE INDEX IF NOT EXISTS idx_recipe_instructions_recipe ON wdiet.recipe_instructions(recipe_uuid, position);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS / CREATE OR REPLACE).
    """
    with transaction("create schema", timeout=60) as tx:
        tx.execute(SCHEMA_SQL)
    logger.info("Database schema initialized successfully.")


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")
