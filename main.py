from fastapi import FastAPI, HTTPException, Depends
import os
from dotenv import load_dotenv

from errors import MetadataError, NotFoundError
from metadata import InstanceMetadataClient

# Load environment variables from .env file
load_dotenv()

HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8000"))

app = FastAPI()


def get_client():
    # One client per request; requests.Session is not shared across threadpool workers
    return InstanceMetadataClient()


def fetch_metadata(client: InstanceMetadataClient):
    try:
        return client.get()
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MetadataError as e:
        # Return a 500 if metadata fetch fails
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/metadata")
def metadata(client: InstanceMetadataClient = Depends(get_client)):
    return fetch_metadata(client).to_dict()


@app.get("/location")
def location(client: InstanceMetadataClient = Depends(get_client)):
    instance_metadata = fetch_metadata(client)
    return {
        "region": instance_metadata.region,
        "availabilityZone": instance_metadata.availability_zone,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=HOST, port=PORT)
