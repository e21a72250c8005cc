#!/usr/bin/env python3
"""
Create the agents table using a direct PostgreSQL connection.
"""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv
import psycopg2
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT

# Load environment
load_dotenv()

db_url = os.environ.get('SUPABASE_DB_URL')
if not db_url:
    print("ERROR: SUPABASE_DB_URL not found in .env file")
    sys.exit(1)

# Read SQL file
sql_file = Path(__file__).parent / 'agents_schema.sql'
with open(sql_file, 'r') as f:
    sql_content = f.read()

print("Connecting to Supabase PostgreSQL database...")
print("=" * 70)

try:
    conn = psycopg2.connect(db_url)
    conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
    cursor = conn.cursor()

    print("✓ Connected successfully!")
    print("\nExecuting agents schema SQL...")
    print("=" * 70)

    try:
        cursor.execute(sql_content)
        print("✓ SQL executed successfully!")
    except psycopg2.Error as e:
        error_msg = str(e)
        if 'function gen_random_uuid() does not exist' in error_msg:
            print("\n" + "=" * 70)
            print("❌ ERROR: gen_random_uuid() is unavailable.")
            print("\nEnable the pgcrypto extension (Database → Extensions) or")
            print("run on PostgreSQL 13+, then re-run this script.")
            print("=" * 70)
        else:
            print(f"❌ SQL execution failed: {error_msg}")
        raise

    # Verify the table and its owner index
    cursor.execute("""
        SELECT column_name
        FROM information_schema.columns
        WHERE table_name = 'agents'
        ORDER BY ordinal_position
    """)
    columns = [row[0] for row in cursor.fetchall()]
    print(f"\n✓ agents table columns: {', '.join(columns)}")

    cursor.execute("""
        SELECT indexname
        FROM pg_indexes
        WHERE tablename = 'agents'
    """)
    indexes = cursor.fetchall()
    print(f"✓ {len(indexes)} index(es) present")
    for idx in indexes:
        print(f"  - {idx[0]}")

    cursor.close()
    conn.close()

    print("\n🎉 Agent directory is ready!")

except psycopg2.Error as e:
    print(f"\n❌ Database error: {e}")
    sys.exit(1)
except Exception as e:
    print(f"\n❌ Error: {e}")
    sys.exit(1)
