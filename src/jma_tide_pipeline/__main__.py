"""python -m jma_tide_pipeline"""

from jma_tide_pipeline.main import main

if __name__ == "__main__":
    main()
