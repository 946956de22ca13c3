# cpcenter

A library for managing the qualification materials of content providers
(CPs). A CP submits its material (name, icon, business licence,
verification images, website) either as a draft or for review; a reviewer
then passes or rejects it. Records are kept in SQLite.

## What it does

- **Create** a material. Draft submissions start as `MaterialStatus.DRAFT`,
  review submissions as `MaterialStatus.REVIEWING`. The CP record is
  created on its first material and afterwards has its newest material id
  and name refreshed.
- **Update** a material that is not under review or online. Materials with
  status `REVIEWING` or `ONLINE` cannot be changed.
- **Review** a material: `ReviewResult.PASS` sets it `ONLINE`,
  `ReviewResult.REJECT` sets it `REJECTED`; the reviewer's remark and
  operator name from `ReviewRemark` are stored with it.
- **Get** a material by its id (`GetCPMaterialRequest.material_id`;
  `cp_id` must be positive).

Submit modes are `SubmitMode.SUBMIT_DRAFT` and `SubmitMode.SUBMIT_REVIEW`.
`parse_material_status`, `parse_submit_mode` and `parse_review_result`
turn labels such as `"Reviewing"` or `"SubmitDraft"` back into enum members.

## Modules

- `cpcenter.types` – the enums, `BaseResp`, `CPMaterial`, `ReviewRemark`
- `cpcenter.messages` – request and response messages for the four operations
- `cpcenter.models` – the stored rows `GpCp` and `GpCpMaterial`, with
  `as_row`, `cp_from_row` and `material_from_row`
- `cpcenter.idgen` – time-ordered unique ids (`IdGenerator`,
  `set_id_generator`, `next_id`)
- `cpcenter.repository` – the `CPMaterialRepository` and `CPRepository`
  interfaces, their SQLite implementations and `create_schema`
- `cpcenter.config` – YAML configuration (`load_config`, `parse_config`,
  `Config`, `ConfigError`)
- `cpcenter.handler` – the business rules, `CPMaterialHandler`
- `cpcenter.service` – `CpCenterService`, which exposes the operations by
  name, and `init_client`, which wires everything up

## Usage

```python
from cpcenter.messages import CreateCPMaterialRequest, GetCPMaterialRequest
from cpcenter.service import CpCenterService, init_client
from cpcenter.types import CPMaterial, SubmitMode

handler = init_client("cpcenter.db")   # a path or an open sqlite3.Connection
service = CpCenterService(handler)

created = service.create_cp_material(
    CreateCPMaterialRequest(
        cp_material=CPMaterial(cp_id=123, cp_name="Test CP", business_licenses="License ABC"),
        submit_mode=SubmitMode.SUBMIT_DRAFT,
    )
)
print(created.base_resp.code, created.material_id)

fetched = service.get_cp_material(
    GetCPMaterialRequest(cp_id=123, material_id=created.material_id)
)
print(fetched.cp_material.cp_name)
```

`init_client` installs the process-wide id generator, creates the tables if
they are missing and returns a `CPMaterialHandler`.

Operations can also be called by name through `CpCenterService.dispatch`
(`"CreateCPMaterial"`, `"UpdateCPMaterial"`, `"ReviewCPMaterial"`,
`"GetCPMaterial"`); `method_names()` lists them. An unknown name raises
`UnknownMethodError`; a request of the wrong type raises `TypeError`.

## Configuration

`load_config(path)` reads a YAML file of the form

```yaml
mysql:
  dsn: "user:password@tcp(localhost:3306)/cpcenter"
```

and returns a `Config` with `mysql_dsn`. A missing or empty DSN, or a
malformed file, raises `ConfigError`.

## Errors

- Create: an invalid request raises `InvalidArgumentError`; repository
  failures raise `RuntimeError` wrapping the cause.
- Review: an invalid request raises `InvalidArgumentError`, a missing
  material `MaterialNotFoundError`, and an update that changes no row
  `UpdateFailedError`.
- Update and get report their failures in `base_resp` with code `"500"`
  and a message; a code of `"0"` means success.
- Repository lookups raise `RecordNotFoundError` when nothing matches.

## What it does not do

- There is no network server or client: the operations are called as
  Python methods, directly or through `dispatch`.
- Storage is SQLite only. `Config.mysql_dsn` is read and checked, but the
  package does not connect to MySQL.
- There is no command-line program.