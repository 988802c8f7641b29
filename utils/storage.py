"""
Storage Module - S3 object storage served through the CDN

Keys follow ``{folder}/[{entity}/]{variant}_{fileId}.webp``; the public URL
of a key is ``{CLOUDFRONT_URL}/{key}``.
"""

import re

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app

from .images import VARIANT_PREFIXES


CACHE_CONTROL = 'max-age=31536000, immutable'
PRESIGNED_URL_EXPIRY = 3600

_VARIANT_PATTERN = re.compile(r'^(?:' + '|'.join(VARIANT_PREFIXES) + r')(.+)$')

_clients = {}


class StorageError(Exception):
    pass


class StorageNotConfiguredError(StorageError):
    pass


def is_configured():
    cfg = current_app.config
    return bool(cfg.get('S3_BUCKET_NAME') and cfg.get('S3_REGION'))


def get_s3_client():
    """Return a cached boto3 S3 client for the configured region and credentials"""
    if not is_configured():
        raise StorageNotConfiguredError('Object storage is not configured')

    cfg = current_app.config
    cache_key = (cfg['S3_REGION'], cfg.get('APP_AWS_ACCESS_KEY_ID'))
    client = _clients.get(cache_key)
    if client is None:
        client = boto3.client(
            's3',
            region_name=cfg['S3_REGION'],
            aws_access_key_id=cfg.get('APP_AWS_ACCESS_KEY_ID'),
            aws_secret_access_key=cfg.get('APP_AWS_SECRET_ACCESS_KEY'),
        )
        _clients[cache_key] = client
    return client


def _bucket():
    return current_app.config['S3_BUCKET_NAME']


def public_url(key):
    base = (current_app.config.get('CLOUDFRONT_URL') or '').rstrip('/')
    return f"{base}/{key}"


def upload_to_s3(data, key, content_type):
    """Store ``data`` under ``key`` and return its CDN URL"""
    try:
        get_s3_client().put_object(
            Bucket=_bucket(),
            Key=key,
            Body=data,
            ContentType=content_type,
            CacheControl=CACHE_CONTROL,
        )
    except (BotoCoreError, ClientError) as e:
        current_app.logger.error(f"✗ S3 upload failed for {key}: {str(e)}")
        raise StorageError(f"Upload failed for {key}") from e

    current_app.logger.debug(f"Uploaded {key} ({len(data)} bytes)")
    return public_url(key)


def delete_from_s3(key):
    try:
        get_s3_client().delete_object(Bucket=_bucket(), Key=key)
    except (BotoCoreError, ClientError) as e:
        raise StorageError(f"Delete failed for {key}") from e


def delete_s3_folder(prefix):
    """Delete every object under ``prefix`` and return how many were removed"""
    client = get_s3_client()
    deleted = 0
    try:
        paginator = client.get_paginator('list_objects_v2')
        for page in paginator.paginate(Bucket=_bucket(), Prefix=prefix):
            for obj in page.get('Contents', []):
                client.delete_object(Bucket=_bucket(), Key=obj['Key'])
                deleted += 1
    except (BotoCoreError, ClientError) as e:
        raise StorageError(f"Folder delete failed for {prefix}") from e

    current_app.logger.info(f"Deleted {deleted} object(s) under {prefix}")
    return deleted


def variant_keys(key):
    """Every sibling variant key of ``key``, or just ``[key]`` for a plain file"""
    folder, _, filename = key.rpartition('/')
    folder = f"{folder}/" if folder else ''
    match = _VARIANT_PATTERN.match(filename)
    if not match:
        return [key]
    base = match.group(1)
    return [f"{folder}{prefix}{base}" for prefix in VARIANT_PREFIXES]


def delete_image_variants(key):
    """Delete ``key`` together with all of its size variants"""
    keys = variant_keys(key)
    if len(keys) == 1:
        delete_from_s3(key)
        return

    for variant_key in keys:
        try:
            delete_from_s3(variant_key)
        except StorageNotConfiguredError:
            raise
        except StorageError:
            # Not every prefix exists for every upload
            continue


def delete_folder_quietly(prefix):
    """Best-effort folder cleanup used when a record is deleted"""
    try:
        return delete_s3_folder(prefix)
    except StorageNotConfiguredError:
        current_app.logger.warning(f"Storage not configured, skipped cleanup of {prefix}")
    except StorageError as e:
        current_app.logger.error(f"✗ Could not clean up {prefix}: {str(e)}")
    return 0


def get_presigned_upload_url(key, content_type, expires=PRESIGNED_URL_EXPIRY):
    """Pre-signed PUT URL so a browser can upload ``key`` directly"""
    return get_s3_client().generate_presigned_url(
        'put_object',
        Params={'Bucket': _bucket(), 'Key': key, 'ContentType': content_type},
        ExpiresIn=expires,
    )


__all__ = [
    'StorageError',
    'StorageNotConfiguredError',
    'get_s3_client',
    'public_url',
    'upload_to_s3',
    'delete_from_s3',
    'delete_s3_folder',
    'variant_keys',
    'delete_image_variants',
    'delete_folder_quietly',
    'get_presigned_upload_url',
]
