# generate_data.py
import json
import random
import argparse
from pathlib import Path
from faker import Faker

# Setup argument parser
parser = argparse.ArgumentParser(description="Generate a dummy seed dataset in the upstream JSON shape.")
parser.add_argument("--rows", type=int, default=60, help="Number of transactions to generate")
parser.add_argument("--output", default="product_transaction.json", help="Where to write the JSON array")
args = parser.parse_args()

CATEGORIES = ["men's clothing", "women's clothing", "jewelery", "electronics"]

fake = Faker()
output_file = Path(args.output)

records = []
for index in range(args.rows):
    records.append({
        "id": index + 1,
        "title": fake.catch_phrase(),
        "description": fake.paragraph(nb_sentences=3),
        "price": round(random.uniform(5.0, 1000.0), 2),
        "category": random.choice(CATEGORIES),
        "image": fake.image_url(),
        "sold": fake.boolean(),
        "dateOfSale": fake.date_time_between(start_date="-3y", end_date="now").strftime("%Y-%m-%dT%H:%M:%S+05:30"),
    })

output_file.write_text(json.dumps(records, indent=2), encoding="utf-8")
print(f"Wrote {len(records)} transactions to {output_file}")
print(f"Seed the API from it with: SEED_SOURCE={output_file.resolve()}")
