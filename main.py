import sys
import os


# Add the current directory to Python path
sys.path.insert(0, os.path.dirname(__file__))
if len(sys.argv) < 2:
    raise Exception("Pipeline name required: monthly_revenue")

pipeline = sys.argv[1]

if pipeline == "monthly_revenue":
    from pipelines.monthly_revenue.job import main
else:
    raise Exception(f"Unknown pipeline: {pipeline}")

main(sys.argv[2:])
