"""
FlashCalc Web Portal Launcher
Simple script to start the web server
"""
import os
import sys

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

try:
    import api
except ImportError as e:
    print(f"Error importing modules: {e}")
    print("\nMake sure you have installed the required dependencies:")
    print("  pip install -e .")
    sys.exit(1)


if __name__ == "__main__":
    print("Starting FlashCalc Web Portal...")
    api.main()
